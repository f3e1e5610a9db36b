# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import abc
import collections
import collections.abc
import re
import zlib

from warnings import warn

from id3merge.errors import *
from id3merge.conversion import *
from id3merge.id3 import default_table
from id3merge.update import merge

import id3merge.names as names

_HEADER_SIZE = 10
_IDENTIFIER = b"ID3"

_TAG_UNSYNCHRONISED = 0x80
_TAG_EXTENDED_HEADER = 0x40
_TAG_EXPERIMENTAL = 0x20
_TAG24_FOOTER = 0x10

_FRAME23_FORMAT_COMPRESSED = 0x0080
_FRAME23_FORMAT_ENCRYPTED = 0x0040
_FRAME23_FORMAT_GROUP = 0x0020
_FRAME23_FORMAT_UNKNOWN_MASK = 0x001F

_FRAME24_FORMAT_GROUP = 0x0040
_FRAME24_FORMAT_COMPRESSED = 0x0008
_FRAME24_FORMAT_ENCRYPTED = 0x0004
_FRAME24_FORMAT_UNSYNCHRONISED = 0x0002
_FRAME24_FORMAT_DATA_LENGTH_INDICATOR = 0x0001
_FRAME24_FORMAT_UNKNOWN_MASK = 0x00B0

TagHeader = collections.namedtuple("TagHeader", "version revision flags size")

def find_tag(data):
    """Return the offset of the first valid ID3v2 tag header in data.

    The string "ID3" may occur by accident inside audio data, so each
    occurrence is checked for a plausible version and size before it is
    accepted.  Raises NoTagError if there is no tag, and InvalidSizeError
    if the only candidates found had a corrupt size field.
    """
    bad_size = False
    offset = data.find(_IDENTIFIER)
    while offset != -1:
        header = data[offset:offset + _HEADER_SIZE]
        if (len(header) == _HEADER_SIZE
            and header[3] != 0xFF and header[4] != 0xFF
            and header[3] in _tag_versions):
            if Syncsafe.is_valid(header[6:10]):
                return offset
            bad_size = True
        offset = data.find(_IDENTIFIER, offset + 1)
    if bad_size:
        raise InvalidSizeError("ID3v2 tag has an invalid size field")
    raise NoTagError("ID3v2 tag not found")

def decode_header(data, offset=0):
    "Decode the 10-byte tag header at offset into a TagHeader."
    header = data[offset:offset + _HEADER_SIZE]
    if len(header) < _HEADER_SIZE or header[0:3] != _IDENTIFIER:
        raise NoTagError("ID3v2 header not found")
    version, revision = header[3], header[4]
    if version not in _tag_versions or revision == 0xFF:
        raise TagError("Unknown ID3 version: 2.{0}.{1}".format(version, revision))
    if not Syncsafe.is_valid(header[6:10]):
        raise InvalidSizeError("Invalid ID3v2 tag size")
    flags = _tag_versions[version]._interpret_tag_flags(header[5])
    return TagHeader(version, revision, frozenset(flags),
                     Syncsafe.decode(header[6:10]))

def encode_header(size):
    """Return an ID3v2.3 tag header for a body of size bytes.

    Tags are always written in ID3v2.3 format, even when the frames come
    from a tag of another version.
    """
    return _IDENTIFIER + bytes([3, 0, 0]) + Syncsafe.encode(size, width=4)

def _is_frame_id(data):
    return re.match(b"^[A-Z0-9]{4}$", data) is not None

def _encode_one_frame(frameid, framedata):
    data = bytearray()
    data.extend(frameid.encode("ASCII"))
    data.extend(Int8.encode(len(framedata), width=4))
    # Flags
    data.extend(b"\x00\x00")
    assert len(data) == 10
    data.extend(framedata)
    return data

def encode_frames(raw, table=None):
    """Encode a frame id -> value mapping into ID3v2.3 frames.

    List values of multi-valued frames produce one frame per element.
    Unknown frames and values that cannot be encoded are skipped with a
    warning.
    """
    if table is None:
        table = default_table
    data = bytearray()
    for frameid, value in raw.items():
        cls = table.frame_class(frameid)
        if cls is None or not _is_frame_id(frameid.encode("ASCII")):
            warn("Skipping unknown frame {0}".format(frameid),
                 UnknownFrameWarning)
            continue
        if table.is_multiple(frameid) and isinstance(value, (list, tuple)):
            values = value
        else:
            values = [value]
        for v in values:
            try:
                framedata = cls._from_value(frameid, v)._to_data()
            except (TypeError, ValueError) as e:
                warn("Skipping invalid frame {0} ({1})".format(frameid, e),
                     FrameWarning)
                continue
            data.extend(_encode_one_frame(frameid, framedata))
    return bytes(data)

def embed(frames):
    "Wrap already encoded frames in a tag header."
    return encode_header(len(frames)) + bytes(frames)

def create(tags, table=None):
    "Return a standalone ID3v2.3 tag containing tags."
    if table is None:
        table = default_table
    return embed(encode_frames(names.to_raw(tags, table), table))

def remove_tag(data):
    """Return data with its ID3v2 tag cut out.

    Data without a tag is returned unchanged.  A tag whose size field is
    corrupt raises InvalidSizeError, as its extent is unknown.
    """
    try:
        offset = find_tag(data)
    except NoTagError:
        return data
    size = Syncsafe.decode(data[offset + 6:offset + 10])
    return data[:offset] + data[offset + _HEADER_SIZE + size:]

def decode_tag(data, include=None, exclude=None, table=None):
    "Locate and decode the ID3v2 tag in data."
    offset = find_tag(data)
    cls = _tag_versions[data[offset + 3]]
    return cls.read(data, offset, include=include, exclude=exclude, table=table)

def read(data, include=None, exclude=None, only_raw=False, no_raw=False,
         table=None):
    """Return the tags in data as a dict.

    The result maps human-readable names to frame values, and the key "raw"
    to a dict of the same values keyed by frame id.  With only_raw, just the
    frame id dict is returned; with no_raw, the "raw" key is left out.
    include and exclude restrict decoding to (or away from) the given
    frames.  Data without a usable tag (none at all, a corrupt size field
    or an unreadable header) yields an empty result.
    """
    if table is None:
        table = default_table
    try:
        raw = dict(decode_tag(data, include, exclude, table))
    except (NoTagError, TagError):
        raw = dict()
    if only_raw:
        return raw
    tags = names.to_friendly(raw, table)
    if not no_raw:
        tags["raw"] = raw
    return tags

def update_tag(tags, data, table=None):
    """Merge tags into the tag already in data.

    Returns data with the old tag removed and the merged tag prepended.
    """
    if table is None:
        table = default_table
    try:
        current = dict(decode_tag(data, table=table))
    except NoTagError:
        current = dict()
    raw = merge(tags, current, table)
    return embed(encode_frames(raw, table)) + remove_tag(data)

def _decompress(data, size):
    "Inflate a compressed frame body, refusing to produce more than size bytes."
    decompressor = zlib.decompressobj()
    result = decompressor.decompress(data, size + 1)
    if len(result) > size:
        raise FrameError("Compressed frame exceeds its declared size of {0} bytes".format(size))
    if not decompressor.eof:
        raise FrameError("Truncated compressed frame")
    return result

def _frame_filter(keys, table):
    if keys is None:
        return None
    return set(table.frameid(key) or key for key in keys)


class Tag(collections.abc.MutableMapping, metaclass=abc.ABCMeta):
    """A decoded ID3v2 tag, mapping frame ids to frame values.

    Values of multi-valued frames are lists.  Keys may also be given as
    human-readable names when setting or getting frames.
    """
    version = None

    # Undo tag-level unsynchronisation on the whole body before reading frames
    _unsync_body = True

    _frame_header_size = 10
    _frameid_size = 4

    def __init__(self, frames=None, table=None):
        self.table = table if table is not None else default_table
        self.header = None
        self._frames = dict()
        if frames:
            self.update(frames)

    # MutableMapping methods
    def __iter__(self):
        return iter(self._frames)

    def __len__(self):
        return len(self._frames)

    def _normalize_key(self, key):
        frameid = self.table.frameid(key)
        if frameid is None:
            if key in self._frames:
                return key
            raise KeyError("Unknown frame id " + repr(key))
        return frameid

    def __getitem__(self, key):
        return self._frames[self._normalize_key(key)]

    def __setitem__(self, key, value):
        self._frames[self._normalize_key(key)] = value

    def __delitem__(self, key):
        del self._frames[self._normalize_key(key)]

    def __repr__(self):
        flags = sorted(self.header.flags) if self.header else []
        return "<{0}: ID3v2.{1} tag{2} with {3} frames>".format(
            type(self).__name__,
            self.version,
            ("({0})".format(", ".join(flags)) if flags else ""),
            len(self._frames))

    # Reading tags
    @classmethod
    def read(cls, data, offset=0, include=None, exclude=None, table=None):
        """Decode the tag starting at offset in data.

        Frames that cannot be decoded are skipped with a warning.
        """
        tag = cls(table=table)
        tag.header = decode_header(data, offset)
        if tag.header.version != cls.version:
            raise TagError("ID3v2.{0} header not found".format(cls.version))
        include = _frame_filter(include, tag.table)
        exclude = _frame_filter(exclude, tag.table)
        for (frameid, bflags, framedata) in tag._read_frames(tag._read_body(data, offset)):
            if include is not None and frameid not in include:
                continue
            if exclude is not None and frameid in exclude:
                continue
            framecls = tag.table.frame_class(frameid, tag.version)
            if framecls is None:
                warn("Unknown frame id " + frameid, UnknownFrameWarning)
                continue
            try:
                framedata = tag._interpret_frame_flags(frameid, bflags, bytes(framedata))
                value = framecls._from_data(frameid, framedata)._to_value()
            except (FrameError, ValueError, EOFError, zlib.error) as e:
                warn("Skipping invalid frame {0} ({1})".format(frameid, e),
                     ErrorFrameWarning)
                continue
            if tag.table.is_multiple(frameid):
                tag._frames.setdefault(frameid, []).append(value)
            else:
                tag._frames[frameid] = value
        return tag

    def _read_body(self, data, offset):
        start = offset + _HEADER_SIZE
        body = memoryview(data)[start:start + self.header.size]
        if self._unsync_body and "unsynchronisation" in self.header.flags:
            body = memoryview(Unsync.decode(body))
        if "extended_header" in self.header.flags:
            try:
                body = body[self._extended_header_size(body):]
            except ValueError as e:
                raise TagError("Invalid extended header size") from e
        return body

    def _read_frames(self, body):
        "Yield (frameid, flags, data) for each frame in body."
        pos = 0
        while len(body) - pos >= self._frame_header_size:
            header = bytes(body[pos:pos + self._frame_header_size])
            if header[0] == 0:
                # Padding
                break
            try:
                size = self._decode_frame_size(header)
            except ValueError:
                warn("Invalid frame size at offset {0}".format(pos),
                     ErrorFrameWarning)
                break
            start = pos + self._frame_header_size
            end = start + size
            if end > len(body):
                warn("Frame {0!r} truncated to {1} bytes".format(
                        header[:self._frameid_size], len(body) - start),
                     TruncatedFrameWarning)
                end = len(body)
            rawid = header[:self._frameid_size]
            if self._is_frame_id(rawid):
                yield (self._frameid(rawid.decode("ASCII")),
                       self._decode_frame_flags(header),
                       body[start:end])
            else:
                warn("Skipping frame with invalid id {0!r}".format(rawid),
                     ErrorFrameWarning)
            pos = end

    def _is_frame_id(self, data):
        return _is_frame_id(data)

    def _frameid(self, frameid):
        return frameid

    def _decode_frame_flags(self, header):
        return Int8.decode(header[8:10])

    @classmethod
    @abc.abstractmethod
    def _interpret_tag_flags(cls, bflags): pass

    @abc.abstractmethod
    def _extended_header_size(self, body): pass

    @abc.abstractmethod
    def _decode_frame_size(self, header): pass

    @abc.abstractmethod
    def _interpret_frame_flags(self, frameid, bflags, data): pass

    # Writing tags
    def encode(self):
        """Return the tag as a standalone ID3v2.3 tag.

        The result is an ID3v2.3 tag whatever version the tag was read from.
        """
        return embed(encode_frames(self._frames, self.table))


class Tag22(Tag):
    version = 2

    _frame_header_size = 6
    _frameid_size = 3

    @classmethod
    def _interpret_tag_flags(cls, bflags):
        flags = set()
        if bflags & _TAG_UNSYNCHRONISED:
            flags.add("unsynchronisation")
        if bflags & 0x40: # Compression bit is ill-defined in standard
            raise TagError("ID3v2.2 tag compression is not supported")
        if bflags & 0x3F:
            warn("Unknown ID3v2.2 flags", TagWarning)
        return flags

    def _extended_header_size(self, body):
        return 0

    def _is_frame_id(self, data):
        return re.match(b"^[A-Z0-9]{3}$", data) is not None

    def _frameid(self, frameid):
        # Known ID3v2.2 frames are stored under their ID3v2.3 ids
        return self.table.frameid_from_v2(frameid) or frameid

    def _decode_frame_size(self, header):
        return Int8.decode(header[3:6])

    def _decode_frame_flags(self, header):
        # No frame flags in v2.2
        return 0

    def _interpret_frame_flags(self, frameid, bflags, data):
        return data

class Tag23(Tag):
    version = 3

    @classmethod
    def _interpret_tag_flags(cls, bflags):
        flags = set()
        if bflags & _TAG_UNSYNCHRONISED:
            flags.add("unsynchronisation")
        if bflags & _TAG_EXTENDED_HEADER:
            flags.add("extended_header")
        if bflags & _TAG_EXPERIMENTAL:
            flags.add("experimental")
        if bflags & 0x1F:
            warn("Unknown ID3v2.3 flags", TagWarning)
        return flags

    def _extended_header_size(self, body):
        # The size field does not include itself
        return 4 + Int8.decode(body[0:4])

    def _decode_frame_size(self, header):
        return Int8.decode(header[4:8])

    def _interpret_frame_flags(self, frameid, bflags, data):
        if bflags & _FRAME23_FORMAT_UNKNOWN_MASK:
            raise FrameError("Invalid ID3v2.3 frame encoding flags: 0x{0:X}".format(bflags))
        if bflags & _FRAME23_FORMAT_ENCRYPTED:
            raise EncryptedFrameError("Can't read ID3v2.3 encrypted frames")
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            if len(data) < 4:
                raise EOFError("Missing decompressed size")
            size = Int8.decode(data[:4])
            data = data[4:]
        if bflags & _FRAME23_FORMAT_GROUP:
            data = data[1:]
        if bflags & _FRAME23_FORMAT_COMPRESSED:
            data = _decompress(data, size)
        return data

class Tag24(Tag):
    version = 4

    # Older versions of iTunes stored frame sizes as straight 8bit
    # integers, not syncsafe.  (This is known to be fixed in iTunes 8.2.)
    ITUNES_WORKAROUND = False

    # Unsynchronisation is a per-frame property in ID3v2.4
    _unsync_body = False

    @classmethod
    def _interpret_tag_flags(cls, bflags):
        flags = set()
        if bflags & _TAG_UNSYNCHRONISED:
            flags.add("unsynchronisation")
        if bflags & _TAG_EXTENDED_HEADER:
            flags.add("extended_header")
        if bflags & _TAG_EXPERIMENTAL:
            flags.add("experimental")
        if bflags & _TAG24_FOOTER:
            flags.add("footer")
        if bflags & 0x0F:
            warn("Unknown ID3v2.4 flags", TagWarning)
        return flags

    def _extended_header_size(self, body):
        # The size field includes itself
        return Syncsafe.decode(body[0:4])

    def _decode_frame_size(self, header):
        if self.ITUNES_WORKAROUND:
            return Int8.decode(header[4:8])
        return Syncsafe.decode(header[4:8])

    def _interpret_frame_flags(self, frameid, bflags, data):
        if bflags & _FRAME24_FORMAT_UNKNOWN_MASK:
            raise FrameError("Unknown ID3v2.4 frame encoding flags: 0x{0:X}".format(bflags))
        if bflags & _FRAME24_FORMAT_GROUP:
            data = data[1:]
        if bflags & _FRAME24_FORMAT_ENCRYPTED:
            raise EncryptedFrameError("Can't read ID3v2.4 encrypted frames")
        size = None
        if bflags & _FRAME24_FORMAT_DATA_LENGTH_INDICATOR:
            if len(data) < 4:
                raise EOFError("Missing data length indicator")
            if bflags & _FRAME24_FORMAT_COMPRESSED:
                size = Syncsafe.decode(data[:4])
            data = data[4:]
        if (bflags & _FRAME24_FORMAT_UNSYNCHRONISED
            or "unsynchronisation" in self.header.flags):
            data = Unsync.decode(data)
        if bflags & _FRAME24_FORMAT_COMPRESSED:
            if size is None:
                raise FrameError("Compressed ID3v2.4 frame without data length indicator")
            data = _decompress(data, size)
        return data


_tag_versions = {
    2: Tag22,
    3: Tag23,
    4: Tag24,
    }
