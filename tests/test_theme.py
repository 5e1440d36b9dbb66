from __future__ import annotations

import unittest

from merchant_charts.model import coerce_color
from merchant_charts.theme import DARK_THEME, LIGHT_THEME, theme_for_scheme, validate_theme_tokens


class ThemeTests(unittest.TestCase):
    def test_defaults_validate(self) -> None:
        self.assertEqual(validate_theme_tokens(), LIGHT_THEME)
        self.assertEqual(validate_theme_tokens(base=DARK_THEME), DARK_THEME)

    def test_overrides_merge_on_base(self) -> None:
        theme = validate_theme_tokens({"text": "#000000", "palette": ["#111111", "#222222"]})
        self.assertEqual(theme.text, "#000000")
        self.assertEqual(theme.palette, ("#111111", "#222222"))
        self.assertEqual(theme.palette_color(3), "#222222")
        self.assertEqual(theme.background, LIGHT_THEME.background)

    def test_unknown_token_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown theme token: accent"):
            validate_theme_tokens({"accent": "#FFFFFF"})

    def test_bad_values_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Token `text` must be a hex color"):
            validate_theme_tokens({"text": "black"})
        with self.assertRaisesRegex(ValueError, "Token `palette`"):
            validate_theme_tokens({"palette": []})
        with self.assertRaisesRegex(ValueError, "Token `palette`"):
            validate_theme_tokens({"palette": "#FFFFFF"})
        with self.assertRaisesRegex(ValueError, "Token `font_size_px`"):
            validate_theme_tokens({"font_size_px": 0})

    def test_scheme_lookup(self) -> None:
        self.assertIs(theme_for_scheme("dark"), DARK_THEME)
        self.assertIs(theme_for_scheme("light"), LIGHT_THEME)
        self.assertIs(theme_for_scheme(None), LIGHT_THEME)


class ColorTests(unittest.TestCase):
    def test_hex_forms(self) -> None:
        self.assertEqual(coerce_color("#FFF"), (255, 255, 255, 255))
        self.assertEqual(coerce_color("#7C3AED"), (0x7C, 0x3A, 0xED, 255))
        self.assertEqual(coerce_color("#11223380"), (0x11, 0x22, 0x33, 0x80))
        self.assertEqual(coerce_color((1, 2, 3)), (1, 2, 3, 255))

    def test_alpha_scaling(self) -> None:
        self.assertEqual(coerce_color("#000000", alpha=0.5), (0, 0, 0, 128))
        self.assertEqual(coerce_color("#000000", alpha=2.0), (0, 0, 0, 255))

    def test_invalid_colors(self) -> None:
        with self.assertRaises(ValueError):
            coerce_color("red")
        with self.assertRaises(ValueError):
            coerce_color((1, 2))  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
