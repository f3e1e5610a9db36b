# Copyright (c) 2009, Karoly Lorentey  <karoly@lorentey.hu>

"""File manipulation utilities."""

import os
import os.path
import shutil
import signal
import tempfile

from contextlib import contextmanager

def _is_filename(filename):
    return isinstance(filename, (str, bytes, os.PathLike))

@contextmanager
def opened(filename, mode):
    "Open filename, or do nothing if filename is already an open file object"
    if _is_filename(filename):
        file = open(filename, mode)
        try:
            yield file
        finally:
            if not file.closed:
                file.close()
    else:
        yield filename

@contextmanager
def suppress_interrupt():
    """Suppress KeyboardInterrupt exceptions while the context is active.

    The suppressed interrupt (if any) is raised when the context is exited.
    Outside the main thread, signal handlers cannot be changed, and the
    context does nothing.
    """
    interrupted = False

    def sigint_handler(signum, frame):
        nonlocal interrupted
        interrupted = True

    try:
        s = signal.signal(signal.SIGINT, sigint_handler)
    except ValueError:
        yield None
        return
    try:
        yield None
    finally:
        signal.signal(signal.SIGINT, s)
    if interrupted:
        raise KeyboardInterrupt()

def read_data(filename):
    "Return the whole contents of filename (a path or a binary file object)."
    with opened(filename, "rb") as file:
        if not _is_filename(filename):
            file.seek(0)
        return file.read()

def write_data(filename, data, in_place=False):
    """Replace the contents of filename with data.

    Any KeyboardInterrupts arriving while write_data is running are
    deferred until the operation is complete.

    If in_place is true, or filename is an open file object, the file is
    truncated and rewritten directly; an error or interrupt may then leave
    it corrupt.  Otherwise the data is written to a temporary file first,
    which is then renamed over the original file.  This prevents
    corruption on systems with atomic renames (UNIX), and reduces the
    window of vulnerability elsewhere (Windows).
    """
    with suppress_interrupt():
        if in_place or not _is_filename(filename):
            with opened(filename, "rb+") as file:
                file.seek(0)
                file.truncate()
                file.write(data)
            return
        temp = tempfile.NamedTemporaryFile(dir=os.path.dirname(os.path.abspath(filename)),
                                           prefix="id3merge-",
                                           suffix=".tmp",
                                           delete=False)
        try:
            temp.write(data)
        except BaseException:
            temp.close()
            os.unlink(temp.name)
            raise
        temp.close()
        shutil.copymode(filename, temp.name)
        shutil.move(temp.name, filename)
