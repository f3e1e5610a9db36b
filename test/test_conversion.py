# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import unittest

from id3merge.conversion import *

class SyncsafeTestCase(unittest.TestCase):
    def testEncode(self):
        self.assertEqual(Syncsafe.encode(0), b"\x00\x00\x00\x00")
        self.assertEqual(Syncsafe.encode(127), b"\x00\x00\x00\x7f")
        self.assertEqual(Syncsafe.encode(128), b"\x00\x00\x01\x00")
        self.assertEqual(Syncsafe.encode(257), b"\x00\x00\x02\x01")
        self.assertEqual(Syncsafe.encode((1 << 28) - 1), b"\x7f\x7f\x7f\x7f")

    def testDecode(self):
        self.assertEqual(Syncsafe.decode(b"\x00\x00\x02\x01"), 257)
        self.assertEqual(Syncsafe.decode(b"\x7f\x7f\x7f\x7f"), (1 << 28) - 1)
        self.assertRaises(ValueError, Syncsafe.decode, b"\x00\x80\x00\x00")

    def testRoundTrip(self):
        for n in (0, 1, 127, 128, 16383, 16384, 2097151, 2097152,
                  123456789, (1 << 28) - 1):
            data = Syncsafe.encode(n)
            self.assertEqual(len(data), 4)
            self.assertTrue(Syncsafe.is_valid(data))
            self.assertEqual(Syncsafe.decode(data), n)

    def testOutOfRange(self):
        self.assertRaises(ValueError, Syncsafe.encode, 1 << 28)
        self.assertRaises(ValueError, Syncsafe.encode, -1)

    def testIsValid(self):
        self.assertTrue(Syncsafe.is_valid(b"\x7f\x7f\x7f\x7f"))
        for i in range(4):
            data = bytearray(4)
            data[i] = 0x80
            self.assertFalse(Syncsafe.is_valid(data))

class Int8TestCase(unittest.TestCase):
    def testInt8(self):
        self.assertEqual(Int8.encode(0x1234, width=4), b"\x00\x00\x12\x34")
        self.assertEqual(Int8.encode(0x123456789, width=-4), b"\x01\x23\x45\x67\x89")
        self.assertEqual(Int8.decode(b"\x00\x00\x12\x34"), 0x1234)
        self.assertRaises(ValueError, Int8.encode, 0x10000, width=2)

class UnsyncTestCase(unittest.TestCase):
    def testDecode(self):
        self.assertEqual(Unsync.decode(b"\xff\x00\xe0\x41\xff\x00\x00"),
                         b"\xff\xe0\x41\xff\x00")
        self.assertEqual(Unsync.decode(b"\x00\x41\x00"), b"\x00\x41\x00")

suite = unittest.TestSuite([
        unittest.TestLoader().loadTestsFromTestCase(SyncsafeTestCase),
        unittest.TestLoader().loadTestsFromTestCase(Int8TestCase),
        unittest.TestLoader().loadTestsFromTestCase(UnsyncTestCase),
        ])

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
