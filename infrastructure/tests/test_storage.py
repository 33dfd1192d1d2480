"""
Storage Infrastructure Tests
=============================

Unit tests for the local storage adapter and factory.
"""

import shutil
import tempfile
from io import BytesIO

from django.core.files.storage import FileSystemStorage
from django.test import TestCase, override_settings

from infrastructure.storage import LocalStorageAdapter, StorageFactory, StorageFile, StorageInterface


class StorageInterfaceTest(TestCase):
    def test_interface_is_abstract(self):
        with self.assertRaises(TypeError):
            StorageInterface()


class LocalStorageAdapterTest(TestCase):
    def setUp(self):
        self.root = tempfile.mkdtemp()
        self.adapter = LocalStorageAdapter(FileSystemStorage(location=self.root, base_url="/media/"))

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def test_upload_returns_metadata(self):
        result = self.adapter.upload(BytesIO(b"fake image"), "messages/photo.png", "image/png")

        self.assertIsInstance(result, StorageFile)
        self.assertTrue(result.key.startswith("messages/photo"))
        self.assertEqual(result.size, len(b"fake image"))
        self.assertEqual(result.content_type, "image/png")
        self.assertTrue(result.url.startswith("/media/messages/"))
        self.assertTrue(self.adapter.exists(result.key))

    def test_upload_same_path_keeps_both_files(self):
        first = self.adapter.upload(BytesIO(b"a"), "dup.png", "image/png")
        second = self.adapter.upload(BytesIO(b"b"), "dup.png", "image/png")

        self.assertNotEqual(first.key, second.key)

    def test_delete(self):
        stored = self.adapter.upload(BytesIO(b"bye"), "gone.png", "image/png")

        self.assertTrue(self.adapter.delete(stored.key))
        self.assertFalse(self.adapter.exists(stored.key))

    def test_delete_nonexistent_file(self):
        self.assertFalse(self.adapter.delete("missing.png"))


class StorageFactoryTest(TestCase):
    @override_settings(INFRASTRUCTURE={"STORAGE_BACKEND": "local"})
    def test_create_local(self):
        self.assertIsInstance(StorageFactory.create(), LocalStorageAdapter)

    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            StorageFactory.create("ftp")
