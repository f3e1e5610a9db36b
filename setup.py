#!/usr/bin/env python3

from setuptools import setup

setup(
    name="id3merge",
    version="0.1.0",
    author="Karoly Lorentey",
    author_email="karoly@lorentey.hu",
    packages=["id3merge"],
    python_requires=">=3.6",
    license="BSD",
    description="ID3v2 tag decoding, encoding and merging in pure Python 3",
    long_description="""
id3merge locates ID3v2 tags in byte buffers, decodes ID3v2.2, ID3v2.3 and
ID3v2.4 tags into plain Python values, writes ID3v2.3 tags, and merges new
values into an existing tag.  Corrupt frames are skipped one by one, so a
damaged tag still yields every frame that can be read.
""",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Multimedia :: Sound/Audio"
        ],
    )
