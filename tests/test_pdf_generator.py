# tests/test_pdf_generator.py
import unittest
import sys
import os
import re
import base64
from datetime import datetime, timezone
from io import BytesIO

from PIL import Image, ImageDraw
from PyPDF2 import PdfReader

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from core.config import BUSINESS_CARD_PRESET, GENERIC_PRESET
from core.exceptions import EmbeddingError
from core.page_geometry import calculate_page_geometry
from core.pdf_generator import PDFGenerator, pdf_date
from processing.raster_source import build_data_url


class TestPDFGenerator(unittest.TestCase):

    def setUp(self):
        self.image_url = self.create_test_image('PNG')
        self.geometry = calculate_page_geometry(300, 200, 3, True, 10)

    def create_test_image(self, fmt, size=(120, 80)):
        """Создать тестовое изображение"""
        img = Image.new('RGB', size, color='white')
        draw = ImageDraw.Draw(img)
        draw.rectangle((10, 10, 60, 40), fill=(59, 130, 246))
        buffer = BytesIO()
        img.save(buffer, format=fmt)
        return build_data_url(Image.MIME[fmt], buffer.getvalue())

    def test_signature(self):
        pdf = PDFGenerator(GENERIC_PRESET).build(self.image_url, self.geometry)
        self.assertRegex(pdf[:10], re.compile(rb'^%PDF-1\.[0-9]'))

    def test_page_size(self):
        pdf = PDFGenerator(GENERIC_PRESET).build(self.image_url, self.geometry)
        page = PdfReader(BytesIO(pdf)).pages[0]
        self.assertEqual(len(PdfReader(BytesIO(pdf)).pages), 1)
        self.assertAlmostEqual(float(page.mediabox.width), self.geometry.page_width_pt, places=1)
        self.assertAlmostEqual(float(page.mediabox.height), self.geometry.page_height_pt, places=1)

    def test_trim_marks_add_content(self):
        without = calculate_page_geometry(300, 200, 3, False, 10)
        generator = PDFGenerator(GENERIC_PRESET)
        self.assertGreater(len(generator.build(self.image_url, self.geometry)),
                           len(generator.build(self.image_url, without)))

    def test_registration_marks_add_content(self):
        generator = PDFGenerator(BUSINESS_CARD_PRESET)
        plain = generator.build(self.image_url, self.geometry)
        marked = generator.build(self.image_url, self.geometry, registration_marks=True)
        self.assertGreater(len(marked), len(plain))

    def test_jpeg_is_rejected(self):
        with self.assertRaises(EmbeddingError):
            PDFGenerator(GENERIC_PRESET).build(self.create_test_image('JPEG'), self.geometry)

    def test_corrupt_image_is_rejected(self):
        corrupt = 'data:image/png;base64,' + base64.b64encode(b'not a png').decode()
        with self.assertRaises(EmbeddingError):
            PDFGenerator(GENERIC_PRESET).build(corrupt, self.geometry)

    def test_non_data_url_is_rejected(self):
        with self.assertRaises(EmbeddingError):
            PDFGenerator(GENERIC_PRESET).build('scene.png', self.geometry)

    def test_metadata(self):
        created = datetime(2026, 10, 18, 12, 30, 5, tzinfo=timezone.utc)
        pdf = PDFGenerator(BUSINESS_CARD_PRESET).build(self.image_url, self.geometry, metadata={
            'title': '名刺 - Business Card',
            'producer': 'Canvas Studio',
            'creator': 'Canvas Studio Business Card Export',
            'creation_date': created,
        })

        self.assertTrue(pdf.startswith(b'%PDF-1.'))
        info = PdfReader(BytesIO(pdf)).metadata
        self.assertEqual(info.title, '名刺 - Business Card')
        self.assertEqual(info.producer, 'Canvas Studio')
        self.assertEqual(info.creator, 'Canvas Studio Business Card Export')
        self.assertEqual(info['/CreationDate'], "D:20261018123005+00'00'")

    def test_pdf_date(self):
        self.assertEqual(pdf_date(datetime(2026, 1, 2, 3, 4, 5)), "D:20260102030405+00'00'")


if __name__ == '__main__':
    unittest.main()
