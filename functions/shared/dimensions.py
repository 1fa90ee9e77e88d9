"""
Dimension and Unit Tables
=========================

Static definitions of every supported dimension and its units. This module is
the **single source of truth** for unit conversion factors.

Conventions
-----------
- Each dimension has exactly one base unit with ``to_base == 1``
- ``to_base`` converts a value in the unit to the base unit by multiplication
- Unit ids are kebab-case and unique within a dimension, as are symbols

Usage
-----
    >>> from shared.dimensions import DIMENSIONS, DimensionId
    >>> DIMENSIONS[DimensionId.LENGTH].base_unit
    'meter'

Known Limitation
----------------
Celsius and Fahrenheit are modelled as pure multipliers on the Kelvin base
(1 and 5/9). That is only correct for temperature *differences*; absolute
readings are not offset.
"""

from typing import Dict, List, Tuple

from .models import Dimension, Unit


class DimensionId:
    """Dimension ids used in code."""
    LENGTH = "length"
    MASS = "mass"
    TIME = "time"
    VOLUME = "volume"
    AREA = "area"
    VELOCITY = "velocity"
    TEMPERATURE = "temperature"
    DATA = "data"
    ENERGY = "energy"
    FORCE = "force"
    FREQUENCY = "frequency"
    POWER = "power"
    PRESSURE = "pressure"


def _dimension(id: str, name: str, base_unit: str, units: List[Tuple[str, str, float]]) -> Dimension:
    return Dimension(
        id=id,
        name=name,
        base_unit=base_unit,
        units=[Unit(id=uid, symbol=symbol, to_base=to_base) for uid, symbol, to_base in units],
    )


LENGTH = _dimension(DimensionId.LENGTH, "Length / Distance", "meter", [
    # Metric
    ("meter", "m", 1),
    ("kilometer", "km", 1_000),
    ("centimeter", "cm", 0.01),
    ("millimeter", "mm", 0.001),
    ("micrometer", "µm", 1e-6),
    ("nanometer", "nm", 1e-9),
    ("picometer", "pm", 1e-12),
    # Imperial
    ("inch", "in", 0.0254),
    ("foot", "ft", 0.3048),
    ("yard", "yd", 0.9144),
    ("mile", "mi", 1_609.344),
    # Astronomical
    ("astronomical-unit", "AU", 1.495_978_707e11),
    ("light-year", "ly", 9.460_730_472_580_8e15),
    ("parsec", "pc", 3.085_677_581e16),
    ("angstrom", "Å", 1e-10),
])

MASS = _dimension(DimensionId.MASS, "Mass / Weight", "kilogram", [
    ("kilogram", "kg", 1),
    ("gram", "g", 0.001),
    ("milligram", "mg", 1e-6),
    ("microgram", "µg", 1e-9),
    ("metric-ton", "t", 1_000),
    ("pound", "lb", 0.453_592_37),
    ("ounce", "oz", 0.028_349_523_125),
    ("ton", "ton", 907.184_74),  # US short ton
    ("stone", "st", 6.350_293_18),
    ("solar-mass", "M☉", 1.989e30),
    ("earth-mass", "M⊕", 5.972e24),
])

TIME = _dimension(DimensionId.TIME, "Time / Duration", "second", [
    ("second", "s", 1),
    ("millisecond", "ms", 0.001),
    ("microsecond", "µs", 1e-6),
    ("nanosecond", "ns", 1e-9),
    ("picosecond", "ps", 1e-12),
    ("minute", "min", 60),
    ("hour", "hr", 3_600),
    ("day", "d", 86_400),
    ("week", "wk", 604_800),
    ("month", "mo", 2_629_746),  # 365.25 / 12 days
    ("year", "yr", 31_556_952),  # 365.25 days
    ("decade", "dec", 315_569_520),
    ("century", "cent", 3_155_695_200),
    ("millennium", "kyr", 31_556_952_000),
    ("million-years", "Myr", 31_556_952_000_000),
    ("billion-years", "Gyr", 31_556_952_000_000_000),
])

VOLUME = _dimension(DimensionId.VOLUME, "Volume / Capacity", "liter", [
    ("liter", "L", 1),
    ("milliliter", "mL", 0.001),
    ("cubic-meter", "m³", 1_000),
    ("cubic-centimeter", "cm³", 0.001),
    ("gallon", "gal", 3.785_411_784),  # US
    ("quart", "qt", 0.946_352_946),
    ("pint", "pt", 0.473_176_473),
    ("cup", "cup", 0.236_588_236_5),
    ("fluid-ounce", "fl oz", 0.029_573_529_5625),
    ("tablespoon", "tbsp", 0.014_786_764_78),
    ("teaspoon", "tsp", 0.004_928_921_59),
    ("imperial-gallon", "imp gal", 4.546_09),
    ("cubic-foot", "ft³", 28.316_846_592),
    ("cubic-inch", "in³", 0.016_387_064),
    ("cubic-kilometer", "km³", 1e12),
])

AREA = _dimension(DimensionId.AREA, "Area", "square-meter", [
    ("square-meter", "m²", 1),
    ("square-kilometer", "km²", 1_000_000),
    ("square-centimeter", "cm²", 0.0001),
    ("square-millimeter", "mm²", 0.000_001),
    ("square-micrometer", "µm²", 1e-12),
    ("hectare", "ha", 10_000),
    ("square-foot", "ft²", 0.092_903_04),
    ("square-inch", "in²", 0.000_645_16),
    ("square-yard", "yd²", 0.836_127_36),
    ("square-mile", "mi²", 2_589_988.110_336),
    ("acre", "ac", 4_046.856_422_4),
])

VELOCITY = _dimension(DimensionId.VELOCITY, "Speed / Velocity", "meter-per-second", [
    ("meter-per-second", "m/s", 1),
    ("kilometer-per-hour", "km/h", 0.277_777_778),
    ("kilometer-per-second", "km/s", 1_000),
    ("mile-per-hour", "mph", 0.447_04),
    ("foot-per-second", "ft/s", 0.3048),
    ("knot", "kn", 0.514_444_444),
    ("mach", "Ma", 343),  # sea level, 20°C
    ("speed-of-light", "c", 299_792_458),
])

TEMPERATURE = _dimension(DimensionId.TEMPERATURE, "Temperature", "kelvin", [
    ("kelvin", "K", 1),
    ("celsius", "°C", 1),
    ("fahrenheit", "°F", 5 / 9),
])

DATA = _dimension(DimensionId.DATA, "Data / Information", "byte", [
    ("bit", "bit", 0.125),
    ("kilobit", "Kb", 125),
    ("megabit", "Mb", 125_000),
    ("gigabit", "Gb", 125_000_000),
    ("byte", "B", 1),
    ("kilobyte", "KB", 1_000),
    ("megabyte", "MB", 1_000_000),
    ("gigabyte", "GB", 1_000_000_000),
    ("terabyte", "TB", 1_000_000_000_000),
    ("petabyte", "PB", 1_000_000_000_000_000),
    ("exabyte", "EB", 1e18),
    ("zettabyte", "ZB", 1e21),
    # IEC binary
    ("kibibyte", "KiB", 1_024),
    ("mebibyte", "MiB", 1_048_576),
    ("gibibyte", "GiB", 1_073_741_824),
    ("tebibyte", "TiB", 1_099_511_627_776),
])

ENERGY = _dimension(DimensionId.ENERGY, "Energy", "joule", [
    ("joule", "J", 1),
    ("kilojoule", "kJ", 1_000),
    ("megajoule", "MJ", 1_000_000),
    ("gigajoule", "GJ", 1_000_000_000),
    ("calorie", "cal", 4.184),
    ("kilocalorie", "kcal", 4_184),
    ("watt-hour", "Wh", 3_600),
    ("kilowatt-hour", "kWh", 3_600_000),
    ("electronvolt", "eV", 1.602_176_634e-19),
    ("kiloelectronvolt", "keV", 1.602_176_634e-16),
    ("british-thermal-unit", "BTU", 1_055.06),
    ("ton-tnt", "ton TNT", 4.184e9),
    ("kiloton-tnt", "kt TNT", 4.184e12),
    ("megaton-tnt", "Mt TNT", 4.184e15),
])

FORCE = _dimension(DimensionId.FORCE, "Force", "newton", [
    ("newton", "N", 1),
    ("kilonewton", "kN", 1_000),
    ("meganewton", "MN", 1_000_000),
    ("kilogram-force", "kgf", 9.80665),
    ("gram-force", "gf", 0.00980665),
    ("pound-force", "lbf", 4.44822),
    ("ounce-force", "ozf", 0.278014),
    ("dyne", "dyn", 1e-5),
])

FREQUENCY = _dimension(DimensionId.FREQUENCY, "Frequency", "hertz", [
    ("hertz", "Hz", 1),
    ("kilohertz", "kHz", 1_000),
    ("megahertz", "MHz", 1_000_000),
    ("gigahertz", "GHz", 1_000_000_000),
    ("terahertz", "THz", 1_000_000_000_000),
    ("rpm", "RPM", 1 / 60),
    ("bpm", "BPM", 1 / 60),
])

POWER = _dimension(DimensionId.POWER, "Power", "watt", [
    ("watt", "W", 1),
    ("kilowatt", "kW", 1_000),
    ("megawatt", "MW", 1_000_000),
    ("gigawatt", "GW", 1_000_000_000),
    ("milliwatt", "mW", 0.001),
    ("horsepower", "hp", 745.7),
    ("btu-per-hour", "BTU/h", 0.293071),
])

PRESSURE = _dimension(DimensionId.PRESSURE, "Pressure", "pascal", [
    ("pascal", "Pa", 1),
    ("kilopascal", "kPa", 1_000),
    ("megapascal", "MPa", 1_000_000),
    ("gigapascal", "GPa", 1_000_000_000),
    ("atmosphere", "atm", 101_325),
    ("bar", "bar", 100_000),
    ("millibar", "mbar", 100),
    ("psi", "psi", 6_894.76),
    ("torr", "Torr", 133.322),
    ("mmHg", "mmHg", 133.322),
])


# Iteration order matters: UnitService.get_unit scans in this order.
DIMENSIONS: Dict[str, Dimension] = {
    dim.id: dim
    for dim in (
        LENGTH, MASS, TIME, VOLUME, AREA, VELOCITY, TEMPERATURE,
        DATA, ENERGY, FORCE, FREQUENCY, POWER, PRESSURE,
    )
}
