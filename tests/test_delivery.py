# tests/test_delivery.py
import unittest
import sys
import os
import shutil
import tempfile

from flask import Flask

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from core.models import ExportResult
from utils.delivery import Blob, data_url_to_blob, download_blob, result_to_blob, send_download


class TestBlob(unittest.TestCase):

    def test_data_url_to_blob(self):
        blob = data_url_to_blob('data:image/jpeg;base64,/9j/AA==')
        self.assertEqual(blob.mime_type, 'image/jpeg')
        self.assertEqual(blob.data, b'\xff\xd8\xff\x00')
        self.assertEqual(blob.size, 4)

    def test_missing_mime_defaults_to_png(self):
        self.assertEqual(data_url_to_blob('data:;base64,AAAA').mime_type, 'image/png')

    def test_result_to_blob(self):
        blob = result_to_blob(ExportResult(b'%PDF-1.4', 'export_1.pdf', 'application/pdf'))
        self.assertEqual(blob, Blob(b'%PDF-1.4', 'application/pdf'))


class TestDownloadBlob(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_single_file_and_no_leftovers(self):
        """Один временный файл, один перенос, временных ресурсов не остается"""
        result = download_blob(Blob(b'%PDF-1.4 test', 'application/pdf'), 'export_1.pdf', self.temp_dir)

        self.assertIsNone(result)
        self.assertEqual(os.listdir(self.temp_dir), ['export_1.pdf'])
        with open(os.path.join(self.temp_dir, 'export_1.pdf'), 'rb') as f:
            self.assertEqual(f.read(), b'%PDF-1.4 test')

    def test_filename_is_sanitized(self):
        download_blob(Blob(b'data', 'image/png'), '../../export_2.png', self.temp_dir)
        self.assertEqual(os.listdir(self.temp_dir), ['export_2.png'])

    def test_failed_write_releases_temp_file(self):
        with self.assertRaises(TypeError):
            download_blob(Blob('not bytes', 'image/png'), 'export_3.png', self.temp_dir)
        self.assertEqual(os.listdir(self.temp_dir), [])


class TestSendDownload(unittest.TestCase):

    def test_attachment_response(self):
        app = Flask(__name__)
        result = ExportResult(b'%PDF-1.4 test', 'export_1700000000000.pdf', 'application/pdf')

        with app.test_request_context():
            response = send_download(result)

        self.assertEqual(response.mimetype, 'application/pdf')
        disposition = response.headers['Content-Disposition']
        self.assertIn('attachment', disposition)
        self.assertIn('export_1700000000000.pdf', disposition)


if __name__ == '__main__':
    unittest.main()
