# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""List of frames supported by id3merge.

Each frame is described by a FrameSpec record.  A FrameTable indexes these
records by frame id, by human-readable name and by ID3v2.2 frame id; it is
the lookup service used by the decoder, the encoder and the merger.
"""

import collections
import types

import id3merge.frames as Frames

FrameSpec = collections.namedtuple(
    "FrameSpec", "frameid name frame multiple compare_key v2id frame22")

def frame(frameid, name, cls=Frames.TextFrame, *, multiple=False,
          compare_key=None, v2id=None, frame22=None):
    assert Frames.is_frame_class(cls)
    assert compare_key is None or multiple
    return FrameSpec(frameid, name, cls, multiple, compare_key,
                     v2id, frame22 or cls)

_frames = (
    # Identification frames
    frame("TIT1", "content_group", v2id="TT1"),
    frame("TIT2", "title", v2id="TT2"),
    frame("TIT3", "subtitle", v2id="TT3"),
    frame("TALB", "album", v2id="TAL"),
    frame("TOAL", "original_title", v2id="TOT"),
    frame("TRCK", "track_number", v2id="TRK"),
    frame("TPOS", "part_of_set", v2id="TPA"),
    frame("TSST", "set_subtitle"),
    frame("TSRC", "isrc", v2id="TRC"),

    # Involved persons frames
    frame("TPE1", "artist", v2id="TP1"),
    frame("TPE2", "performer_info", v2id="TP2"),
    frame("TPE3", "conductor", v2id="TP3"),
    frame("TPE4", "remix_artist", v2id="TP4"),
    frame("TOPE", "original_artist", v2id="TOA"),
    frame("TEXT", "text_writer", v2id="TXT"),
    frame("TOLY", "original_text_writer", v2id="TOL"),
    frame("TCOM", "composer", v2id="TCM"),
    frame("TENC", "encoded_by", v2id="TEN"),

    # Derived and subjective properties frames
    frame("TBPM", "bpm", v2id="TBP"),
    frame("TLEN", "length", v2id="TLE"),
    frame("TKEY", "initial_key", v2id="TKE"),
    frame("TLAN", "language", v2id="TLA"),
    frame("TCON", "genre", v2id="TCO"),
    frame("TFLT", "file_type", v2id="TFT"),
    frame("TMED", "media_type", v2id="TMT"),
    frame("TMOO", "mood"),

    # Rights and license frames
    frame("TCOP", "copyright", v2id="TCR"),
    frame("TPRO", "produced_notice"),
    frame("TPUB", "publisher", v2id="TPB"),
    frame("TOWN", "file_owner"),
    frame("TRSN", "internet_radio_name"),
    frame("TRSO", "internet_radio_owner"),

    # Other text frames
    frame("TOFN", "original_filename", v2id="TOF"),
    frame("TDLY", "playlist_delay", v2id="TDY"),
    frame("TDEN", "encoding_time"),
    frame("TDOR", "original_release_time"),
    frame("TDRC", "recording_time"),
    frame("TDRL", "release_time"),
    frame("TDTG", "tagging_time"),
    frame("TSSE", "encoding_technology", v2id="TSS"),
    frame("TSOA", "album_sort_order"),
    frame("TSOP", "performer_sort_order"),
    frame("TSOT", "title_sort_order"),

    # ID3v2.3 only text frames
    frame("TYER", "year", v2id="TYE"),
    frame("TDAT", "date", v2id="TDA"),
    frame("TIME", "time", v2id="TIM"),
    frame("TORY", "original_year", v2id="TOR"),
    frame("TRDA", "recording_dates", v2id="TRD"),
    frame("TSIZ", "size", v2id="TSI"),

    # User defined text
    frame("TXXX", "user_defined_text", Frames.UserTextFrame,
          multiple=True, compare_key="description", v2id="TXX"),

    # URL link frames
    frame("WCOM", "commercial_url", Frames.URLFrame, multiple=True, v2id="WCM"),
    frame("WCOP", "copyright_url", Frames.URLFrame, v2id="WCP"),
    frame("WOAF", "file_url", Frames.URLFrame, v2id="WAF"),
    frame("WOAR", "artist_url", Frames.URLFrame, multiple=True, v2id="WAR"),
    frame("WOAS", "audio_source_url", Frames.URLFrame, v2id="WAS"),
    frame("WORS", "radio_station_url", Frames.URLFrame),
    frame("WPAY", "payment_url", Frames.URLFrame),
    frame("WPUB", "publisher_url", Frames.URLFrame, v2id="WPB"),
    frame("WXXX", "user_defined_url", Frames.UserURLFrame,
          multiple=True, compare_key="description", v2id="WXX"),

    # Structured frames
    frame("COMM", "comment", Frames.CommentFrame,
          multiple=True, compare_key="description", v2id="COM"),
    frame("USLT", "unsynchronised_lyrics", Frames.CommentFrame,
          multiple=True, compare_key="description", v2id="ULT"),
    frame("APIC", "image", Frames.PictureFrame,
          multiple=True, compare_key="type", v2id="PIC",
          frame22=Frames.PictureFrame22),
    frame("GEOB", "encapsulated_object", Frames.ObjectFrame,
          multiple=True, compare_key="description", v2id="GEO"),
    frame("POPM", "popularimeter", Frames.PopularimeterFrame,
          multiple=True, compare_key="email", v2id="POP"),
    frame("PCNT", "play_counter", Frames.CounterFrame, v2id="CNT"),
    frame("UFID", "unique_file_identifier", Frames.OwnerDataFrame,
          multiple=True, compare_key="owner", v2id="UFI"),
    frame("PRIV", "private", Frames.OwnerDataFrame, multiple=True),
)


class FrameTable:
    """Immutable lookup of FrameSpec records.

    >>> table = FrameTable(_frames)
    >>> table["TXXX"].compare_key
    'description'
    >>> table.frameid("title")
    'TIT2'
    """
    def __init__(self, specs):
        self._specs = types.MappingProxyType(
            collections.OrderedDict((spec.frameid, spec) for spec in specs))
        self._names = types.MappingProxyType(
            dict((spec.name, spec.frameid) for spec in specs if spec.name))
        self._v2ids = types.MappingProxyType(
            dict((spec.v2id, spec.frameid) for spec in specs if spec.v2id))

    def __getitem__(self, frameid):
        return self._specs[frameid]

    def __contains__(self, frameid):
        return frameid in self._specs

    def __iter__(self):
        return iter(self._specs)

    def __len__(self):
        return len(self._specs)

    def get(self, frameid):
        return self._specs.get(frameid)

    def is_multiple(self, frameid):
        spec = self._specs.get(frameid)
        return spec is not None and spec.multiple

    def frameid(self, key):
        "Return the frame id for a frame id or a human-readable name, or None."
        if key in self._specs:
            return key
        return self._names.get(key)

    def name(self, frameid):
        spec = self._specs.get(frameid)
        return spec.name if spec is not None else None

    def frameid_from_v2(self, v2id):
        "Return the ID3v2.3 frame id for an ID3v2.2 frame id, or None."
        return self._v2ids.get(v2id)

    def frame_class(self, frameid, version=3):
        """Return the frame class decoding frameid in the given tag version.

        Frames missing from the table are decoded by category: text frames
        and URL frames are recognized by their first letter.
        """
        spec = self._specs.get(frameid)
        if spec is not None:
            return spec.frame22 if version == 2 else spec.frame
        if frameid.startswith("T") and frameid != "TXXX":
            return Frames.TextFrame
        if frameid.startswith("W") and frameid != "WXXX":
            return Frames.URLFrame
        return None

    def __repr__(self):
        return "<FrameTable: {0} frames>".format(len(self._specs))


default_table = FrameTable(_frames)
