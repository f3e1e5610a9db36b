# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""Reading and writing the ID3v2 tag of an audio file.

The whole file is read into memory; the tag is then manipulated with the
buffer functions of id3merge.tags and the result is written back.
"""

import id3merge.fileutil as fileutil
import id3merge.tags as tags

def read_file(filename, **options):
    """Return the tags of filename.

    Keyword arguments are passed on to id3merge.read().
    """
    return tags.read(fileutil.read_data(filename), **options)

def write_file(newtags, filename, table=None):
    "Replace the ID3v2 tag of filename (if any) with a new tag of newtags."
    data = fileutil.read_data(filename)
    data = tags.create(newtags, table) + tags.remove_tag(data)
    fileutil.write_data(filename, data)

def update_file(newtags, filename, table=None):
    "Merge newtags into the ID3v2 tag of filename."
    data = fileutil.read_data(filename)
    fileutil.write_data(filename, tags.update_tag(newtags, data, table))

def remove_file_tag(filename):
    """Remove the ID3v2 tag from filename.

    Returns False if the file had no tag.
    """
    data = fileutil.read_data(filename)
    stripped = tags.remove_tag(data)
    if len(stripped) == len(data):
        return False
    fileutil.write_data(filename, stripped)
    return True
