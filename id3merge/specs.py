# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc
import collections.abc

from abc import abstractmethod

from id3merge.conversion import *
from id3merge.errors import *

# The idea for the Spec system comes from Mutagen.

def optionalspec(spec):
    spec._optional = True
    return spec

class Spec(metaclass=abc.ABCMeta):
    def __init__(self, name):
        self.name = name

    _optional = False
    default = None

    @abstractmethod
    def read(self, frame, data): pass

    @abstractmethod
    def write(self, frame, value): pass

    def validate(self, frame, value):
        self.write(frame, value)
        return value

class ByteSpec(Spec):
    default = 0
    def read(self, frame, data):
        if len(data) < 1:
            raise EOFError()
        return data[0], data[1:]
    def write(self, frame, value):
        return bytes([value])
    def validate(self, frame, value):
        if not isinstance(value, int):
            raise TypeError("Not a byte")
        if value not in range(256):
            raise ValueError("Invalid byte value")
        return value

class CounterSpec(Spec):
    "An integer of at least 32 bits that eats the rest of the frame."
    default = 0
    def read(self, frame, data):
        if len(data) < 4:
            raise EOFError()
        return Int8.decode(data), bytes()
    def write(self, frame, value):
        return Int8.encode(value, width=-4)
    def validate(self, frame, value):
        if type(value) is not int:
            raise TypeError("Not an integer: {0}".format(repr(value)))
        if value < 0:
            raise ValueError("Value is negative")
        return value

class BinaryDataSpec(Spec):
    default = bytes()
    def read(self, frame, data):
        return data, bytes()
    def write(self, frame, value):
        return bytes(value)
    def validate(self, frame, value):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise TypeError("Not a byte sequence")
        return bytes(value)

class SimpleStringSpec(Spec):
    def __init__(self, name, length):
        super().__init__(name)
        self.length = length
    def read(self, frame, data):
        if len(data) < self.length:
            raise EOFError()
        return data[:self.length].decode('iso-8859-1'), data[self.length:]
    def write(self, frame, value):
        data = value.encode('iso-8859-1')
        if len(data) != self.length:
            raise ValueError("String length mismatch")
        return data
    def validate(self, frame, value):
        if not isinstance(value, str):
            raise TypeError("Not a string")
        if len(value) != self.length:
            raise ValueError("String length mismatch")
        value.encode('iso-8859-1')
        return value

class LanguageSpec(SimpleStringSpec):
    default = "XXX"
    def __init__(self, name):
        super().__init__(name, 3)

class NullTerminatedStringSpec(Spec):
    default = ""
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        if not sep:
            raise EOFError()
        return rawstr.decode('iso-8859-1'), data
    def write(self, frame, value):
        return value.encode('iso-8859-1') + b"\x00"
    def validate(self, frame, value):
        if not isinstance(value, str):
            raise TypeError("Not a string")
        value.encode('iso-8859-1')
        return value

class URLStringSpec(Spec):
    "A Latin-1 URL running to the end of the frame."
    default = ""
    def read(self, frame, data):
        rawstr, sep, data = data.partition(b"\x00")
        if len(rawstr) == 0 and len(data) > 0:
            # iTunes prepends an extra null byte to WFED frames
            rawstr, sep, data = data.partition(b"\x00")
        return rawstr.decode('iso-8859-1'), bytes()
    def write(self, frame, value):
        return value.encode('iso-8859-1')
    def validate(self, frame, value):
        if not isinstance(value, str):
            raise TypeError("Not a string")
        value.encode('iso-8859-1')
        return value

class EncodingSpec(ByteSpec):
    "EncodingSpec must be the first spec."
    def read(self, frame, data):
        enc, data = super().read(frame, data)
        if enc & 0xFC:
            raise FrameError("Invalid encoding 0x{0:X}".format(enc))
        return enc, data
    def validate(self, frame, value):
        if isinstance(value, str):
            value = value.lower().replace("-", "")
            for i in range(len(EncodedStringSpec._encodings)):
                if EncodedStringSpec._encodings[i][0].replace("-", "") == value:
                    value = i
                    break
        if not isinstance(value, int):
            raise TypeError("Not an encoding")
        if 0 <= value <= 3:
            return value
        raise ValueError("Invalid encoding 0x{0:X}".format(value))

class EncodedStringSpec(Spec):
    "A string in the frame's text encoding, closed by a terminator."
    _encodings = (('iso-8859-1', b"\x00"),
                  ('utf-16', b"\x00\x00"),
                  ('utf-16-be', b"\x00\x00"),
                  ('utf-8', b"\x00"))
    default = ""

    def _split(self, frame, data):
        term = self._encodings[frame.encoding][1]
        if len(term) == 1:
            rawstr, sep, data = data.partition(term)
            if not sep:
                raise EOFError()
            return rawstr, data
        for i in range(0, len(data) - 1, 2):
            if data[i:i+2] == term:
                return data[:i], data[i+2:]
        raise EOFError()

    def _decode(self, frame, rawstr):
        return bytes(rawstr).decode(self._encodings[frame.encoding][0])

    def _encode(self, frame, value):
        enc = self._encodings[frame.encoding][0]
        if enc == 'utf-16':
            # Always little endian with a byte order mark
            return b"\xff\xfe" + value.encode('utf-16-le')
        return value.encode(enc)

    def read(self, frame, data):
        rawstr, data = self._split(frame, data)
        return self._decode(frame, rawstr), data

    def write(self, frame, value):
        return self._encode(frame, value) + self._encodings[frame.encoding][1]

    def validate(self, frame, value):
        if not isinstance(value, str):
            raise TypeError("Not a string")
        return value

class EncodedFullTextSpec(EncodedStringSpec):
    "An encoded string running to the end of the frame."
    def read(self, frame, data):
        term = self._encodings[frame.encoding][1]
        if data.endswith(term) and len(data) % len(term) == 0:
            data = data[:-len(term)]
        return self._decode(frame, data), bytes()

    def write(self, frame, value):
        return self._encode(frame, value)
