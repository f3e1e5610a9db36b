# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Merging new tag values into an existing tag."""

import collections.abc

from id3merge.id3 import default_table

import id3merge.names as names

def merge(tags, current, table=None):
    """Merge tags into current, a dict of frame values keyed by frame id.

    Single-valued frames are replaced.  New values of a multi-valued frame
    are added to the existing list: a value whose compare key matches an
    existing record replaces that record in place, anything else is
    appended.  Frames that are not mentioned in tags are left alone.
    current is modified in place and returned.
    """
    if table is None:
        table = default_table
    for frameid, value in names.to_raw(tags, table).items():
        spec = table.get(frameid)
        existing = current.get(frameid)
        if (spec is None or not spec.multiple or value is None
            or not isinstance(existing, list)):
            current[frameid] = value
        else:
            _merge_values(spec.compare_key, value, existing)
    return current

def update_tags(tags, current, table=None):
    """Merge tags into the raw frames of a decoded tag.

    current is a result of id3merge.read(); its "raw" dict is updated and
    returned.
    """
    raw = current.get("raw")
    if raw is None:
        raw = dict()
    return merge(tags, raw, table)

def _merge_values(compare_key, value, existing):
    if isinstance(value, (list, tuple)):
        values = value
    else:
        values = [value]

    if compare_key is None:
        existing.extend(values)
        return

    index = dict()
    for (i, record) in enumerate(existing):
        if isinstance(record, collections.abc.Mapping):
            index[record.get(compare_key)] = i

    for record in values:
        if (isinstance(record, collections.abc.Mapping)
            and record.get(compare_key) in index):
            existing[index[record[compare_key]]] = record
        else:
            existing.append(record)
