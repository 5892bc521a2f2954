import unittest
import numpy


class TestFixture(unittest.TestCase):
    def assertArrayEqual(self, a, b):
        self.assertEqual( numpy.shape(a), numpy.shape(b) )
        self.assertIsNone(numpy.testing.assert_array_equal(a,b))

    def assertArrayNear(self, a, b, decimals):
        self.assertEqual( numpy.shape(a), numpy.shape(b) )
        self.assertIsNone(numpy.testing.assert_array_almost_equal(a,b,decimals))

    def assertArrayAllClose(self, a, b, atol, rtol=0.0):
        self.assertEqual( numpy.shape(a), numpy.shape(b) )
        self.assertIsNone(numpy.testing.assert_allclose(a, b, rtol=rtol, atol=atol))

    def assertNear(self, a, b, decimals):
        self.assertAlmostEqual(float(a), float(b), decimals)
