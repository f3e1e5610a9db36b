# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest

import id3merge
from id3merge.errors import *
from id3merge.id3 import frame, FrameTable
from id3merge.frames import OwnerDataFrame, TextFrame

class MergeTestCase(unittest.TestCase):
    def testReplaceSingle(self):
        current = {"TIT2": "old", "TALB": "album"}
        id3merge.merge({"title": "new"}, current)
        self.assertEqual(current, {"TIT2": "new", "TALB": "album"})

    def testCompareKey(self):
        current = {"TXXX": [{"description": "a", "value": "1"},
                            {"description": "b", "value": "2"}]}
        id3merge.merge({"TXXX": [{"description": "b", "value": "3"},
                                 {"description": "c", "value": "4"}]},
                       current)
        self.assertEqual(current["TXXX"], [{"description": "a", "value": "1"},
                                           {"description": "b", "value": "3"},
                                           {"description": "c", "value": "4"}])

    def testTupleValue(self):
        current = {"TXXX": [{"description": "a", "value": "1"}]}
        id3merge.merge({"TXXX": ({"description": "a", "value": "2"},
                                 {"description": "b", "value": "3"})}, current)
        self.assertEqual(current["TXXX"], [{"description": "a", "value": "2"},
                                           {"description": "b", "value": "3"}])

    def testSingleRecordIntoList(self):
        current = {"COMM": [{"language": "eng", "description": "", "text": "x"}]}
        id3merge.merge({"comment": {"language": "deu", "description": "",
                                    "text": "y"}}, current)
        self.assertEqual(current["COMM"], [{"language": "deu",
                                            "description": "", "text": "y"}])

    def testNoCompareKey(self):
        current = {"PRIV": [{"owner": "a", "data": b"1"}]}
        id3merge.merge({"private": {"owner": "a", "data": b"2"}}, current)
        self.assertEqual(current["PRIV"], [{"owner": "a", "data": b"1"},
                                           {"owner": "a", "data": b"2"}])

    def testExistingNotList(self):
        current = {"TXXX": "garbage"}
        id3merge.merge({"TXXX": {"description": "a", "value": "1"}}, current)
        self.assertEqual(current["TXXX"], {"description": "a", "value": "1"})

    def testMissingFrame(self):
        current = {"TPE1": "artist"}
        id3merge.merge({"TXXX": [{"description": "a", "value": "1"}]}, current)
        self.assertEqual(current, {"TPE1": "artist",
                                   "TXXX": [{"description": "a", "value": "1"}]})

    def testUnknownName(self):
        current = {}
        with self.assertWarns(UnknownFrameWarning):
            id3merge.merge({"colour": "blue"}, current)
        self.assertEqual(current, {})

    def testCustomTable(self):
        table = FrameTable([frame("TIT2", "title"),
                            frame("TXXX", "extra", TextFrame, multiple=True)])
        current = {"TXXX": ["a"]}
        id3merge.merge({"extra": "a"}, current, table)
        self.assertEqual(current, {"TXXX": ["a", "a"]})

    def testUpdateTags(self):
        current = {"title": "old", "raw": {"TIT2": "old", "TPE1": "artist"}}
        self.assertEqual(id3merge.update_tags({"title": "new"}, current),
                         {"TIT2": "new", "TPE1": "artist"})
        self.assertEqual(id3merge.update_tags({"title": "new"}, {}),
                         {"TIT2": "new"})

class UpdateTagTestCase(unittest.TestCase):
    audio = b"\xff\xfb\x90\x64" + bytes(32)

    def testUpdate(self):
        data = id3merge.create({
                "title": "old",
                "artist": "someone",
                "user_defined_text": [{"description": "a", "value": "1"}],
                }) + self.audio
        data = id3merge.update_tag({
                "title": "new",
                "user_defined_text": {"description": "b", "value": "2"},
                }, data)
        self.assertTrue(data.endswith(self.audio))
        self.assertEqual(id3merge.read(data, only_raw=True), {
                "TIT2": "new",
                "TPE1": "someone",
                "TXXX": [{"description": "a", "value": "1"},
                         {"description": "b", "value": "2"}],
                })

    def testNoTag(self):
        data = id3merge.update_tag({"album": "x"}, self.audio)
        self.assertEqual(data, id3merge.create({"album": "x"}) + self.audio)

    def testInvalidSize(self):
        data = bytearray(id3merge.create({"album": "x"}) + self.audio)
        data[8] = 0x80
        self.assertRaises(InvalidSizeError, id3merge.update_tag,
                          {"album": "y"}, bytes(data))

    def testCustomTable(self):
        table = FrameTable([frame("PRIV", "private", OwnerDataFrame,
                                  multiple=True, compare_key="owner")])
        data = id3merge.create({"private": {"owner": "a", "data": b"1"}}, table)
        data = id3merge.update_tag({"private": {"owner": "a", "data": b"2"}},
                                   data, table)
        self.assertEqual(id3merge.read(data, only_raw=True, table=table),
                         {"PRIV": [{"owner": "a", "data": b"2"}]})


suite = unittest.TestSuite([
        unittest.TestLoader().loadTestsFromTestCase(MergeTestCase),
        unittest.TestLoader().loadTestsFromTestCase(UpdateTagTestCase),
        ])

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
