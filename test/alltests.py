import unittest
import warnings

import id3merge

import test_conversion
import test_frames
import test_tag
import test_update
import test_fileutil
import test_util

warnings.simplefilter("always", id3merge.Warning)

suite = unittest.TestSuite()
suite.addTest(test_conversion.suite)
suite.addTest(test_frames.suite)
suite.addTest(test_tag.suite)
suite.addTest(test_update.suite)
suite.addTest(test_fileutil.suite)
suite.addTest(test_util.suite)

if __name__ == "__main__":
    unittest.main(defaultTest="suite")
