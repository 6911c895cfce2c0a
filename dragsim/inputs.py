"""
Form Input Parsing
==================
Turns the text fields of a parameter form into validated Parameters.

The form carries one text field per physical input plus a time-step
slider: the slider position `s` selects `delta_time = 10 ** -s`.
"""

from typing import Mapping

from .config import DEFAULT_DELTA_TIME_SCALE, DELTA_TIME_SCALE_RANGE
from .errors import InvalidParameter
from .parameters import Parameters


# (field key, form label) in display order
FORM_FIELDS = (
    ('cross_area', 'Cross-sectional area'),
    ('fluid_density', 'Fluid density'),
    ('drag_coefficient', 'Drag coefficient'),
    ('mass', 'Mass'),
    ('initial_velocity', 'Initial velocity'),
    ('initial_angle', 'Initial angle'),
    ('initial_x', 'Initial x'),
    ('initial_y', 'Initial y'),
    ('ending_time', 'Ending time'),
)


def delta_time_from_scale(scale: int) -> float:
    """Time step selected by the slider position."""
    low, high = DELTA_TIME_SCALE_RANGE
    if isinstance(scale, bool) or not isinstance(scale, int) or not low <= scale <= high:
        raise InvalidParameter('delta_time_scale', scale,
                               f"must be an integer in [{low}, {high}]")
    return 10.0 ** -scale


def parse_number(name: str, text) -> float:
    """Parse one form field, reporting the field name on failure."""
    if text is None:
        raise InvalidParameter(name, text, "is missing")
    try:
        return float(str(text).strip())
    except ValueError:
        raise InvalidParameter(name, text, "is not a number") from None


def parse_parameters(fields: Mapping[str, str],
                     delta_time_scale: int = DEFAULT_DELTA_TIME_SCALE) -> Parameters:
    """
    Build Parameters from form text.

    Parameters
    ----------
    fields : mapping
        Text for every key in FORM_FIELDS
    delta_time_scale : int
        Slider position; delta_time = 10 ** -delta_time_scale

    Raises
    ------
    InvalidParameter
        If a field is missing, not a number, or physically invalid.
    """
    values = {key: parse_number(key, fields.get(key)) for key, _ in FORM_FIELDS}
    return Parameters.from_launch(
        cross_area=values['cross_area'],
        fluid_density=values['fluid_density'],
        drag_coefficient=values['drag_coefficient'],
        mass=values['mass'],
        delta_time=delta_time_from_scale(delta_time_scale),
        x=values['initial_x'],
        y=values['initial_y'],
        speed=values['initial_velocity'],
        angle_deg=values['initial_angle'],
        ending_time=values['ending_time'],
    )
