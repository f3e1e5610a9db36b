# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Translation between human-readable tag names and raw frame ids."""

from warnings import warn

from id3merge.errors import *

def to_raw(tags, table):
    """Return a copy of tags keyed by frame id.

    Keys may be human-readable names ("title") or frame ids ("TIT2").
    Unknown keys are skipped with a warning.
    """
    raw = dict()
    for key, value in tags.items():
        frameid = table.frameid(key)
        if frameid is None:
            warn("Unknown frame or tag name {0!r}".format(key),
                 UnknownFrameWarning)
            continue
        raw[frameid] = value
    return raw

def to_friendly(raw, table):
    "Return the values in raw keyed by their human-readable names."
    friendly = dict()
    for frameid, value in raw.items():
        name = table.name(frameid)
        if name is not None:
            friendly[name] = value
    return friendly
