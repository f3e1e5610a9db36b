# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest
import os
import tempfile

import id3merge

class FileOperationsTestCase(unittest.TestCase):
    audio = b"\xff\xfb\x90\x64" + bytes(range(64))

    def setUp(self):
        file = tempfile.NamedTemporaryFile(prefix="id3mergetest-", suffix=".mp3",
                                           delete=False)
        file.write(self.audio)
        file.close()
        self.filename = file.name

    def tearDown(self):
        os.unlink(self.filename)

    def contents(self):
        with open(self.filename, "rb") as file:
            return file.read()

    def testWriteWithoutTag(self):
        tags = {"title": "abc", "artist": "def"}
        id3merge.write_file(tags, self.filename)
        self.assertEqual(self.contents(), id3merge.create(tags) + self.audio)

    def testWriteReplacesTag(self):
        id3merge.write_file({"title": "abc", "artist": "def"}, self.filename)
        id3merge.write_file({"album": "ghi"}, self.filename)
        self.assertEqual(self.contents(),
                         id3merge.create({"album": "ghi"}) + self.audio)

    def testReadFile(self):
        self.assertEqual(id3merge.read_file(self.filename), {"raw": {}})
        id3merge.write_file({"title": "abc"}, self.filename)
        self.assertEqual(id3merge.read_file(self.filename),
                         {"title": "abc", "raw": {"TIT2": "abc"}})
        self.assertEqual(id3merge.read_file(self.filename, only_raw=True),
                         {"TIT2": "abc"})

    def testUpdateFile(self):
        id3merge.write_file({"title": "abc", "artist": "def"}, self.filename)
        id3merge.update_file({"title": "xyz", "album": "ghi"}, self.filename)
        self.assertEqual(id3merge.read_file(self.filename, no_raw=True),
                         {"title": "xyz", "artist": "def", "album": "ghi"})
        self.assertTrue(self.contents().endswith(self.audio))

    def testRemoveFileTag(self):
        self.assertFalse(id3merge.remove_file_tag(self.filename))
        id3merge.write_file({"title": "abc"}, self.filename)
        self.assertTrue(id3merge.remove_file_tag(self.filename))
        self.assertEqual(self.contents(), self.audio)

suite = unittest.TestLoader().loadTestsFromTestCase(FileOperationsTestCase)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
