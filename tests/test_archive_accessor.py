"""Unit tests for the BackupArchive component."""

import os
import shutil
import tempfile
import unittest
import zipfile

from worldcache.archive import BackupArchive, list_backups


class TestBackupArchive(unittest.TestCase):
    """Test cases for the BackupArchive component."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.zip_path = os.path.join(self.temp_dir, "alpha-20240306-140509.zip")

        with zipfile.ZipFile(self.zip_path, 'w', compression=zipfile.ZIP_DEFLATED) as zipf:
            zipf.writestr('alpha/level.dat', b"level data")
            zipf.writestr('alpha/region/r.0.0.mca', b"\x00" * 4096)
            zipf.writestr('alpha/empty/', "")

    def tearDown(self):
        """Clean up test fixtures."""
        shutil.rmtree(self.temp_dir)

    def test_init_with_nonexistent_file(self):
        """Test initialization with a nonexistent file."""
        with self.assertRaises(FileNotFoundError):
            BackupArchive("nonexistent_file.zip")

    def test_init_with_invalid_zip(self):
        """Test initialization with a file that is not a zip."""
        bogus = os.path.join(self.temp_dir, "bogus.zip")
        with open(bogus, 'wb') as f:
            f.write(b"not a zip")

        with self.assertRaises(zipfile.BadZipFile):
            BackupArchive(bogus)

    def test_members_and_roots(self):
        """Test listing members and top-level folders."""
        archive = BackupArchive(self.zip_path)

        self.assertIn('alpha/level.dat', archive.members())
        self.assertEqual(archive.root_folders(), ['alpha'])

    def test_stats(self):
        """Test archive statistics."""
        stats = BackupArchive(self.zip_path).stats()

        self.assertEqual(stats['files'], 2)
        self.assertEqual(stats['directories'], 1)
        self.assertEqual(stats['uncompressed_size'], len(b"level data") + 4096)
        self.assertLess(stats['compressed_size'], stats['uncompressed_size'])
        self.assertEqual(stats['archive_size'], os.path.getsize(self.zip_path))
        self.assertEqual(stats['roots'], ['alpha'])

    def test_verify_intact_archive(self):
        """Test CRC verification of a good archive."""
        self.assertIsNone(BackupArchive(self.zip_path).verify())

    def test_list_backups_newest_first(self):
        """Test listing archives for a world ordered by modification time."""
        older = os.path.join(self.temp_dir, "alpha-20240101-000000.zip")
        shutil.copy(self.zip_path, older)
        os.utime(older, (1000, 1000))
        other = os.path.join(self.temp_dir, "beta-20240101-000000.zip")
        shutil.copy(self.zip_path, other)
        similar = os.path.join(self.temp_dir, "alphabet-20240101-000000.zip")
        shutil.copy(self.zip_path, similar)
        with open(os.path.join(self.temp_dir, "alpha-notes.txt"), 'w') as f:
            f.write("not an archive")

        names = [p.name for p in list_backups(self.temp_dir, world="alpha")]
        self.assertEqual(names, ["alpha-20240306-140509.zip", "alpha-20240101-000000.zip"])

        all_names = [p.name for p in list_backups(self.temp_dir)]
        self.assertEqual(len(all_names), 4)


if __name__ == "__main__":
    unittest.main()
