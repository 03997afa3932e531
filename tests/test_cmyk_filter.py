# tests/test_cmyk_filter.py
import unittest
import sys
import os
import base64
import time
from io import BytesIO
from unittest import mock

import numpy as np
from PIL import Image

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from processing.cmyk_filter import (
    PixelProcessor, apply_cmyk_filter, detect_pixel_processor, simulate_cmyk_array, simulate_cmyk_image
)
from processing.color import cmyk_to_rgb, rgb_to_cmyk
from processing.raster_source import build_data_url, decode_image


def png_data_url(img):
    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return build_data_url('image/png', buffer.getvalue())


class SlowProcessor(PixelProcessor):
    """Декодирование, которое не укладывается в срок"""

    def remap(self, payload):
        time.sleep(0.3)
        return super().remap(payload)


class TestSimulation(unittest.TestCase):

    def test_array_matches_scalar_model(self):
        colors = [(0, 0, 0), (255, 255, 255), (59, 130, 246), (200, 100, 50), (12, 200, 90), (1, 2, 3)]
        result = simulate_cmyk_array(np.array([colors], dtype=np.uint8))
        for index, rgb in enumerate(colors):
            with self.subTest(rgb=rgb):
                self.assertEqual(tuple(int(v) for v in result[0, index]), tuple(cmyk_to_rgb(rgb_to_cmyk(rgb))))

    def test_alpha_is_preserved(self):
        img = Image.new('RGBA', (4, 3), (200, 100, 50, 77))
        result = simulate_cmyk_image(img)
        self.assertEqual(result.mode, 'RGBA')
        self.assertEqual(result.size, (4, 3))
        self.assertEqual(result.getpixel((1, 1)), (199, 99, 50, 77))

    def test_rgb_stays_rgb(self):
        result = simulate_cmyk_image(Image.new('RGB', (2, 2), (59, 130, 246)))
        self.assertEqual(result.mode, 'RGB')
        self.assertEqual(result.getpixel((0, 0)), (59, 130, 245))


class TestApplyCmykFilter(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.data_url = png_data_url(Image.new('RGBA', (16, 8), (200, 100, 50, 128)))

    async def test_filter_remaps_pixels(self):
        result = await apply_cmyk_filter(self.data_url, PixelProcessor(), timeout=5)
        img = decode_image(result)
        self.assertEqual(img.size, (16, 8))
        self.assertEqual(img.getpixel((3, 3)), (199, 99, 50, 128))

    async def test_without_processor_returns_input(self):
        result = await apply_cmyk_filter(self.data_url, None)
        self.assertEqual(result, self.data_url)

    async def test_foreign_shape_passes_through(self):
        result = await apply_cmyk_filter('blob:https://example.com/1234', PixelProcessor(), timeout=5)
        self.assertEqual(result, 'blob:https://example.com/1234')

    async def test_timeout_returns_input(self):
        with self.assertLogs('processing.cmyk_filter', level='WARNING'):
            result = await apply_cmyk_filter(self.data_url, SlowProcessor(), timeout=0.05)
        self.assertEqual(result, self.data_url)

    async def test_corrupt_payload_returns_input(self):
        corrupt = 'data:image/png;base64,' + base64.b64encode(b'garbage').decode()
        result = await apply_cmyk_filter(corrupt, PixelProcessor(), timeout=5)
        self.assertEqual(result, corrupt)

    async def test_oversized_image_returns_input(self):
        with mock.patch.object(Image, 'MAX_IMAGE_PIXELS', 10):
            with self.assertLogs('processing.cmyk_filter', level='WARNING'):
                result = await apply_cmyk_filter(self.data_url, PixelProcessor(), timeout=5)
        self.assertEqual(result, self.data_url)

    async def test_timeout_from_environment(self):
        with mock.patch.dict(os.environ, {'EXPORT_CMYK_TIMEOUT': '0.05'}):
            with self.assertLogs('processing.cmyk_filter', level='WARNING') as logs:
                result = await apply_cmyk_filter(self.data_url, SlowProcessor())
        self.assertEqual(result, self.data_url)
        self.assertIn('0.05', logs.output[0])

    def test_capability_detection_is_cached(self):
        processor = detect_pixel_processor()
        self.assertIsInstance(processor, PixelProcessor)
        self.assertIs(detect_pixel_processor(), processor)


if __name__ == '__main__':
    unittest.main()
