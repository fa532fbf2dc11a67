"""Hex color parsing and OKLCH blending used by config generators."""

from __future__ import annotations

import math
import re
from typing import NamedTuple

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class RGB(NamedTuple):
    r: float
    g: float
    b: float


class OKLab(NamedTuple):
    L: float
    a: float
    b: float


class OKLCH(NamedTuple):
    l: float
    c: float
    h: float


def is_valid_hex_color(value: str) -> bool:
    return bool(_HEX_COLOR_RE.match(value))


def hex_to_rgb(value: str) -> RGB | None:
    """Parse ``#rgb`` or ``#rrggbb`` into 0-255 channels."""
    if not is_valid_hex_color(value):
        return None
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{int(round(channel)):02x}" for channel in rgb)


def to_argb(value: str, alpha: str = "ff") -> str:
    """Format a hex color as the ``0xAARRGGBB`` literal SketchyBar and borders expect."""
    rgb = hex_to_rgb(value)
    if rgb is None:
        raise ValueError(f"Invalid hex color: {value!r}")
    return f"0x{alpha}{rgb_to_hex(rgb)[1:]}"


def _srgb_to_linear(value: float) -> float:
    v = value / 255
    return v / 12.92 if v <= 0.04045 else ((v + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(value: float) -> float:
    # Unclamped so out-of-gamut results stay detectable
    if value <= 0.0031308:
        v = 12.92 * value
    else:
        v = 1.055 * math.copysign(abs(value) ** (1 / 2.4), value) - 0.055
    return v * 255


def rgb_to_oklab(rgb: RGB) -> OKLab:
    r = _srgb_to_linear(rgb.r)
    g = _srgb_to_linear(rgb.g)
    b = _srgb_to_linear(rgb.b)

    l = 0.4122214708 * r + 0.5363325363 * g + 0.0514459929 * b
    m = 0.2119034982 * r + 0.6806995451 * g + 0.1073969566 * b
    s = 0.0883024619 * r + 0.2817188376 * g + 0.6299787005 * b

    l_, m_, s_ = (math.copysign(abs(x) ** (1 / 3), x) for x in (l, m, s))

    return OKLab(
        L=0.2104542553 * l_ + 0.7936177850 * m_ - 0.0040720468 * s_,
        a=1.9779984951 * l_ - 2.4285922050 * m_ + 0.4505937099 * s_,
        b=0.0259040371 * l_ + 0.7827717662 * m_ - 0.8086757660 * s_,
    )


def oklab_to_rgb(lab: OKLab) -> RGB:
    l_ = lab.L + 0.3963377774 * lab.a + 0.2158037573 * lab.b
    m_ = lab.L - 0.1055613458 * lab.a - 0.0638541728 * lab.b
    s_ = lab.L - 0.0894841775 * lab.a - 1.2914855480 * lab.b

    l, m, s = l_ ** 3, m_ ** 3, s_ ** 3

    return RGB(
        _linear_to_srgb(+4.0767416621 * l - 3.3077115913 * m + 0.2309699292 * s),
        _linear_to_srgb(-1.2684380046 * l + 2.6097574011 * m - 0.3413193965 * s),
        _linear_to_srgb(-0.0041960863 * l - 0.7034186147 * m + 1.7076147010 * s),
    )


def oklab_to_oklch(lab: OKLab) -> OKLCH:
    c = math.hypot(lab.a, lab.b)
    h = math.degrees(math.atan2(lab.b, lab.a))
    if h < 0:
        h += 360
    # Hue is meaningless for near-zero chroma
    return OKLCH(lab.L, c, 0.0 if c < 0.0001 else h)


def oklch_to_oklab(lch: OKLCH) -> OKLab:
    h = math.radians(lch.h)
    return OKLab(lch.l, lch.c * math.cos(h), lch.c * math.sin(h))


def hex_to_oklch(value: str) -> OKLCH | None:
    rgb = hex_to_rgb(value)
    if rgb is None:
        return None
    return oklab_to_oklch(rgb_to_oklab(rgb))


def _in_gamut(rgb: RGB) -> bool:
    return all(-0.5 <= channel <= 255.5 for channel in rgb)


def _clamp_channel(value: float) -> float:
    return max(0.0, min(255.0, value))


def oklch_to_hex(lch: OKLCH) -> str:
    """Convert to hex, reducing chroma until the color fits in sRGB."""
    clamped = OKLCH(max(0.0, min(1.0, lch.l)), max(0.0, lch.c), lch.h)
    rgb = oklab_to_rgb(oklch_to_oklab(clamped))

    if not _in_gamut(rgb):
        low, high = 0.0, clamped.c
        for _ in range(12):
            mid = (low + high) / 2
            candidate = oklab_to_rgb(oklch_to_oklab(OKLCH(clamped.l, mid, clamped.h)))
            if _in_gamut(candidate):
                low = mid
            else:
                high = mid
        rgb = oklab_to_rgb(oklch_to_oklab(OKLCH(clamped.l, low, clamped.h)))

    return rgb_to_hex(RGB(*(_clamp_channel(channel) for channel in rgb)))


def blend_colors(first: str, second: str, factor: float) -> str | None:
    """Blend two hex colors in OKLCH space; ``factor`` 0 keeps ``first``."""
    lch1 = hex_to_oklch(first)
    lch2 = hex_to_oklch(second)
    if lch1 is None or lch2 is None:
        return None

    # Interpolate hue along the shortest arc
    h1, h2 = lch1.h, lch2.h
    if abs(h2 - h1) > 180:
        if h2 > h1:
            h1 += 360
        else:
            h2 += 360

    hue = h1 + (h2 - h1) * factor
    return oklch_to_hex(
        OKLCH(
            l=lch1.l + (lch2.l - lch1.l) * factor,
            c=lch1.c + (lch2.c - lch1.c) * factor,
            h=hue % 360,
        )
    )
