# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Class definitions for ID3v2 frame bodies.

Each frame class describes the layout of a frame body as a sequence of
specs.  Frames are converted from and to plain Python values: a frame with a
single field (besides the text encoding) is represented by the value of that
field, any other frame by a dict mapping field names to values.
"""

import abc
import collections.abc

from id3merge.errors import *
from id3merge.specs import *

class Frame(metaclass=abc.ABCMeta):
    _framespec = tuple()

    # Text encodings tried in order when writing a frame
    preferred_encodings = (0, 1)

    def __init__(self, frameid=None, **kwargs):
        self.frameid = frameid if frameid else type(self).__name__
        assert len(self._framespec) > 0
        for spec in self._framespec:
            val = kwargs.get(spec.name, None)
            setattr(self, spec.name, val)

    def __setattr__(self, name, value):
        # Automatic validation on assignment
        if value is not None:
            for spec in self._framespec:
                if name == spec.name:
                    value = spec.validate(self, value)
                    break
        super().__setattr__(name, value)

    def __eq__(self, other):
        return (isinstance(other, type(self))
                and self.frameid == other.frameid
                and all(getattr(self, spec.name, None) ==
                        getattr(other, spec.name, None)
                        for spec in self._framespec))

    @classmethod
    def _value_specs(cls):
        return [spec for spec in cls._framespec
                if not isinstance(spec, EncodingSpec)]

    @classmethod
    def _from_data(cls, frameid, data):
        frame = cls(frameid=frameid)
        for spec in frame._framespec:
            try:
                val, data = spec.read(frame, data)
                setattr(frame, spec.name, val)
            except EOFError:
                if not spec._optional:
                    raise
        return frame

    @classmethod
    def _from_value(cls, frameid, value):
        specs = cls._value_specs()
        if len(specs) == 1:
            return cls(frameid=frameid, **{specs[0].name: value})
        if not isinstance(value, collections.abc.Mapping):
            raise TypeError("{0} needs a mapping with keys {1}".format(
                    frameid, ", ".join(spec.name for spec in specs)))
        unknown = set(value) - set(spec.name for spec in specs)
        if unknown:
            raise ValueError("Unknown {0} fields: {1}".format(
                    frameid, ", ".join(sorted(unknown))))
        fields = dict((spec.name, value.get(spec.name, spec.default))
                      for spec in specs)
        return cls(frameid=frameid, **fields)

    def _to_value(self):
        specs = self._value_specs()
        if len(specs) == 1:
            return getattr(self, specs[0].name)
        return dict((spec.name, getattr(self, spec.name)) for spec in specs)

    def _to_data(self):
        def encode_fields():
            data = bytearray()
            for spec in self._framespec:
                value = getattr(self, spec.name)
                if value is None:
                    if spec._optional:
                        break
                    value = spec.default
                data.extend(spec.write(self, value))
            return bytes(data)

        def try_preferred_encodings():
            orig_encoding = self.encoding
            try:
                for encoding in self.preferred_encodings:
                    try:
                        self.encoding = encoding
                        return encode_fields()
                    except UnicodeEncodeError:
                        pass
            finally:
                self.encoding = orig_encoding
            raise ValueError("Could not encode strings")

        if not isinstance(self._framespec[0], EncodingSpec):
            return encode_fields()
        elif self.encoding is None:
            return try_preferred_encodings()
        else:
            try:
                return encode_fields()
            except UnicodeEncodeError:
                return try_preferred_encodings()

    def __repr__(self):
        args = []
        if type(self).__name__ != self.frameid:
            args.append("frameid={0!r}".format(self.frameid))
        for spec in self._framespec:
            data = getattr(self, spec.name)
            if isinstance(spec, BinaryDataSpec) and data is not None:
                args.append("{0}=<{1} bytes of binary data {2!r}{3}>".format(
                        spec.name, len(data),
                        data[:20], "..." if len(data) > 20 else ""))
            else:
                args.append("{0}={1!r}".format(spec.name, data))
        return "{0}({1})".format(type(self).__name__, ", ".join(args))


class TextFrame(Frame):
    _framespec = (EncodingSpec("encoding"), EncodedFullTextSpec("text"))

class UserTextFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  EncodedFullTextSpec("value"))

class URLFrame(Frame):
    _framespec = (URLStringSpec("url"), )

class UserURLFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  EncodedStringSpec("description"),
                  URLStringSpec("url"))

class CommentFrame(Frame):
    "Comments and unsynchronised lyrics"
    _framespec = (EncodingSpec("encoding"), LanguageSpec("language"),
                  EncodedStringSpec("description"), EncodedFullTextSpec("text"))

class PictureFrame(Frame):
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  ByteSpec("type"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

class PictureFrame22(PictureFrame):
    "ID3v2.2 picture, with a three-letter image format instead of a MIME type"
    _framespec = (EncodingSpec("encoding"),
                  SimpleStringSpec("format", 3),
                  ByteSpec("type"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

    _mime_types = {"JPG": "image/jpeg", "PNG": "image/png", "-->": "-->"}

    def _to_value(self):
        fmt = self.format.upper()
        return dict(mime=self._mime_types.get(fmt, "image/" + fmt.lower()),
                    type=self.type,
                    description=self.description,
                    data=self.data)

class ObjectFrame(Frame):
    "General encapsulated object"
    _framespec = (EncodingSpec("encoding"),
                  NullTerminatedStringSpec("mime"),
                  EncodedStringSpec("filename"),
                  EncodedStringSpec("description"),
                  BinaryDataSpec("data"))

class PopularimeterFrame(Frame):
    _framespec = (NullTerminatedStringSpec("email"),
                  ByteSpec("rating"),
                  optionalspec(CounterSpec("counter")))

class CounterFrame(Frame):
    "Play counter"
    _framespec = (CounterSpec("count"),)

class OwnerDataFrame(Frame):
    "Binary data tagged with an owner identifier (UFID, PRIV)"
    _framespec = (NullTerminatedStringSpec("owner"), BinaryDataSpec("data"))

def is_frame_class(cls):
    return isinstance(cls, type) and issubclass(cls, Frame)
