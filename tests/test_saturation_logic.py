import unittest
import numpy as np
from photovary.domain.errors import OutOfRangeParameter
from photovary.kernel.image.buffer import PixelBuffer
from photovary.features.saturation.logic import apply_saturation


def single_pixel(r, g, b, a=255):
    return PixelBuffer(np.array([[[r, g, b, a]]], dtype=np.uint8))


class TestSaturationLogic(unittest.TestCase):
    def setUp(self):
        rng = np.random.default_rng(42)
        self.src = PixelBuffer(rng.integers(0, 256, size=(12, 10, 4), dtype=np.uint8))

    def test_zero_is_identity(self):
        self.assertEqual(apply_saturation(self.src, 0), self.src)

    def test_greys_untouched(self):
        arr = np.zeros((1, 3, 4), dtype=np.uint8)
        arr[0, 0] = [0, 0, 0, 255]
        arr[0, 1] = [128, 128, 128, 10]
        arr[0, 2] = [255, 255, 255, 0]
        src = PixelBuffer(arr)
        for percent in (-100, -40, 40, 100):
            self.assertEqual(apply_saturation(src, percent), src)

    def test_full_desaturation_collapses_to_lightness(self):
        # L = (200 + 50) / 2 = 125
        r, g, b, a = apply_saturation(single_pixel(200, 100, 50, 77), -100).pixel(0, 0)
        self.assertEqual(r, g)
        self.assertEqual(g, b)
        self.assertLessEqual(abs(r - 125), 1)
        self.assertEqual(a, 77)

    def test_positive_pushes_channels_apart(self):
        res = apply_saturation(single_pixel(200, 100, 50), 50)
        r, g, b, a = res.pixel(0, 0)
        self.assertGreater(r, 200)
        self.assertLess(g, 100)
        self.assertLessEqual(b, 50)
        self.assertEqual(a, 255)

    def test_fully_saturated_pixel_stays_put(self):
        src = single_pixel(255, 0, 0)
        self.assertEqual(apply_saturation(src, 80), src)

    def test_negative_reduces_spread(self):
        res = apply_saturation(self.src, -30).pixels.astype(int)
        src = self.src.pixels.astype(int)
        spread_before = src[..., :3].max(axis=2) - src[..., :3].min(axis=2)
        spread_after = res[..., :3].max(axis=2) - res[..., :3].min(axis=2)
        self.assertTrue(np.all(spread_after <= spread_before))

    def test_range_and_alpha(self):
        for percent in (-100, -50, 25, 100):
            res = apply_saturation(self.src, percent)
            self.assertEqual(res.pixels.dtype, np.uint8)
            self.assertEqual(res.size, self.src.size)
            np.testing.assert_array_equal(res.pixels[..., 3], self.src.pixels[..., 3])

    def test_empty_buffer(self):
        empty = PixelBuffer(np.zeros((0, 0, 4), dtype=np.uint8))
        self.assertTrue(apply_saturation(empty, 30).is_empty())

    def test_rejects_out_of_domain(self):
        with self.assertRaises(OutOfRangeParameter):
            apply_saturation(self.src, 101)
        with self.assertRaises(OutOfRangeParameter):
            apply_saturation(self.src, float("inf"))


if __name__ == "__main__":
    unittest.main()
