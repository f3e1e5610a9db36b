# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

import id3merge.frames
import id3merge.id3
import id3merge.tags

from id3merge.errors import *
from id3merge.conversion import Syncsafe
from id3merge.frames import Frame
from id3merge.id3 import FrameSpec, FrameTable, default_table
from id3merge.tags import (read, decode_tag, create, embed, remove_tag,
                           update_tag, find_tag, decode_header, encode_header,
                           TagHeader, Tag22, Tag23, Tag24)
from id3merge.update import merge, update_tags
from id3merge.util import read_file, write_file, update_file, remove_file_tag

version = (0, 1, 0)
versionstr = ".".join((str(v) for v in version))
