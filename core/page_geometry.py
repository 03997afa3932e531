"""
Расчет геометрии страницы: вылеты, линия реза, метки обреза
"""
import logging
from typing import List

from .models import ImageBox, MarkSegment, PageGeometry, RegistrationTarget, TrimBox, validate_bleed
from .units import mm_to_points

logger = logging.getLogger(__name__)

# доля резерва под метки, занимаемая радиусом метки совмещения
REGISTRATION_RADIUS_RATIO = 0.25


def calculate_page_geometry(content_width_pt: float, content_height_pt: float,
                            bleed_mm: float, trim_marks: bool,
                            trim_mark_size_mm: float, gap_mm: float = 1.0) -> PageGeometry:
    """
    Геометрия страницы в пунктах.

    content_* - готовый (обрезной) формат. Изображение с вылетами начинается
    в точке (reserve, reserve), линия реза лежит еще на bleed внутрь.
    Резерв под метки учитывается только при trim_marks.
    """
    validate_bleed(bleed_mm)

    bleed = mm_to_points(bleed_mm)
    reserve = mm_to_points(trim_mark_size_mm) if trim_marks else 0.0

    page_width = content_width_pt + 2 * bleed + 2 * reserve
    page_height = content_height_pt + 2 * bleed + 2 * reserve

    image_box = ImageBox(
        x=reserve,
        y=reserve,
        width=content_width_pt + 2 * bleed,
        height=content_height_pt + 2 * bleed,
    )

    left = reserve + bleed
    bottom = reserve + bleed
    trim_box = TrimBox(
        left=left,
        right=left + content_width_pt,
        bottom=bottom,
        top=bottom + content_height_pt,
    )

    logger.debug(f"Страница {page_width:.2f}x{page_height:.2f} pt, вылеты {bleed:.2f} pt, "
                 f"резерв {reserve:.2f} pt")

    return PageGeometry(
        page_width_pt=page_width,
        page_height_pt=page_height,
        bleed_pt=bleed,
        reserve_pt=reserve,
        image_box=image_box,
        trim_box=trim_box,
        mark_length_pt=reserve,
        gap_pt=mm_to_points(gap_mm),
        trim_marks=trim_marks,
    )


def mark_segments(geometry: PageGeometry) -> List[MarkSegment]:
    """Две метки на угол на продолжении линий реза, вне обрезного формата"""
    if not geometry.trim_marks:
        return []

    outer = min(geometry.mark_length_pt, geometry.bleed_pt + geometry.reserve_pt)
    inner = geometry.gap_pt
    if outer <= inner:
        # отрицательной длины не бывает
        return []

    t = geometry.trim_box
    segments = []
    for x, h_dir in ((t.left, -1), (t.right, 1)):
        for y, v_dir in ((t.bottom, -1), (t.top, 1)):
            segments.append(MarkSegment(x + h_dir * outer, y, x + h_dir * inner, y))
            segments.append(MarkSegment(x, y + v_dir * outer, x, y + v_dir * inner))
    return segments


def registration_targets(geometry: PageGeometry) -> List[RegistrationTarget]:
    """Метки совмещения по центру каждой стороны, в полосе резерва"""
    if geometry.reserve_pt <= 0:
        return []

    band = geometry.reserve_pt / 2
    radius = geometry.reserve_pt * REGISTRATION_RADIUS_RATIO
    t = geometry.trim_box
    center_x = (t.left + t.right) / 2
    center_y = (t.bottom + t.top) / 2

    return [
        RegistrationTarget(center_x, band, radius),
        RegistrationTarget(center_x, geometry.page_height_pt - band, radius),
        RegistrationTarget(band, center_y, radius),
        RegistrationTarget(geometry.page_width_pt - band, center_y, radius),
    ]
