"""
Data classes и Enum для движка экспорта
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Union

from .config import DEFAULT_JPEG_QUALITY, BUSINESS_CARD
from .exceptions import UnsupportedFormatError, ValidationError


class ExportFormat(Enum):
    PNG = "png"
    JPEG = "jpeg"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: Union['ExportFormat', str]) -> 'ExportFormat':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise UnsupportedFormatError(value) from None

    @property
    def extension(self) -> str:
        return {
            ExportFormat.PNG: "png",
            ExportFormat.JPEG: "jpg",
            ExportFormat.PDF: "pdf",
        }[self]

    @property
    def mime_type(self) -> str:
        return {
            ExportFormat.PNG: "image/png",
            ExportFormat.JPEG: "image/jpeg",
            ExportFormat.PDF: "application/pdf",
        }[self]


class DpiMode(Enum):
    SCREEN = "screen"
    PRINT = "print"


def validate_bleed(bleed: float):
    if bleed is None or not math.isfinite(bleed) or bleed < 0:
        raise ValidationError("Bleed value must be non-negative")


@dataclass
class ExportOptions:
    format: ExportFormat
    quality: float = DEFAULT_JPEG_QUALITY
    cmyk: bool = False
    bleed: float = 0.0
    trim_marks: bool = False

    def __post_init__(self):
        self.format = ExportFormat.parse(self.format)

    def validate(self):
        validate_bleed(self.bleed)
        if not 0 <= self.quality <= 1:
            raise ValidationError(f"Quality must be between 0 and 1, got {self.quality}")


@dataclass
class PrintSettings:
    bleed: float = BUSINESS_CARD.DEFAULT_BLEED_MM
    trim_marks: bool = True
    registration_marks: bool = False
    cmyk: bool = False
    dpi: DpiMode = DpiMode.PRINT

    def __post_init__(self):
        if not isinstance(self.dpi, DpiMode):
            self.dpi = DpiMode(self.dpi)


class CanvasSize(NamedTuple):
    width: int
    height: int


class TrimBox(NamedTuple):
    left: float
    right: float
    bottom: float
    top: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


class ImageBox(NamedTuple):
    x: float
    y: float
    width: float
    height: float


class MarkSegment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def length(self) -> float:
        return abs(self.x2 - self.x1) + abs(self.y2 - self.y1)


class RegistrationTarget(NamedTuple):
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class PageGeometry:
    page_width_pt: float
    page_height_pt: float
    bleed_pt: float
    reserve_pt: float
    image_box: ImageBox
    trim_box: TrimBox
    mark_length_pt: float
    gap_pt: float
    trim_marks: bool


@dataclass
class ExportResult:
    payload: bytes
    filename: str
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.payload)


__all__ = [
    'ExportFormat', 'DpiMode', 'ExportOptions', 'PrintSettings', 'CanvasSize',
    'TrimBox', 'ImageBox', 'MarkSegment', 'RegistrationTarget', 'PageGeometry',
    'ExportResult', 'validate_bleed',
]
