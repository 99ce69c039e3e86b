import unittest
from photovary.domain.models import AdjustmentParams, FilterKind


class TestConfigDeserialization(unittest.TestCase):
    def test_basic_deserialization(self):
        data = {
            "contrast": 12,
            "lightness": "-4",
            "color_temperature": 30.0,
            "sharpen": "0.3",
            "saturation": None,
            "highlight": 150,
        }
        params = AdjustmentParams.from_flat_dict(data)

        self.assertEqual(params.contrast, 12)
        self.assertEqual(params.lightness, -4)
        self.assertEqual(params.color_temperature, 30)
        self.assertEqual(params.sharpen, 0.3)
        self.assertEqual(params.saturation, 0)
        self.assertEqual(params.highlight, 150)

    def test_garbage_falls_back_to_neutral(self):
        params = AdjustmentParams.from_flat_dict({"contrast": "lots", "sharpen": [1], "extra": 5})
        self.assertEqual(params, AdjustmentParams())

    def test_to_dict_roundtrip(self):
        params = AdjustmentParams(contrast=-3, sharpen=-0.4, highlight=7)
        self.assertEqual(AdjustmentParams.from_flat_dict(params.to_dict()), params)

    def test_clamped(self):
        params = AdjustmentParams(contrast=-90, sharpen=2.0, highlight=999)
        self.assertEqual(
            set(params.out_of_range()),
            {FilterKind.CONTRAST, FilterKind.SHARPEN, FilterKind.HIGHLIGHT},
        )
        clamped = params.clamped()
        self.assertEqual(clamped.contrast, -50)
        self.assertEqual(clamped.sharpen, 0.5)
        self.assertEqual(clamped.highlight, 200)
        self.assertEqual(clamped.out_of_range(), {})

    def test_clamp_maps_nan_to_neutral(self):
        params = AdjustmentParams(lightness=float("nan"), sharpen=float("nan"))
        clamped = params.clamped()
        self.assertEqual(clamped.lightness, 0)
        self.assertEqual(clamped.sharpen, 0.0)

    def test_filter_kind_parse(self):
        self.assertIs(FilterKind.parse("color-temperature"), FilterKind.COLOR_TEMPERATURE)
        with self.assertRaises(ValueError):
            FilterKind.parse("blur")


if __name__ == "__main__":
    unittest.main()
