"""Exceptions raised by autostamp.

Stamping itself never fails: missing columns, missing values and disabled
flags are all silent no-ops. The only errors are bad configuration values
and values that cannot be read as a point in time.
"""


class ConfigurationError(ValueError):
    """A configuration value (timezone mode, boolean flag) is not understood."""

    def __init__(self, setting: str, value=None):
        self.setting = setting
        self.value = value
        msg = f"Invalid value for {setting}: {value!r}" if value is not None else f"Invalid value for {setting}"
        super().__init__(msg)


class TimestampConversionError(ValueError):
    """A collected attribute value could not be converted to a datetime."""

    def __init__(self, value, detail: str = ""):
        self.value = value
        self.detail = detail
        msg = f"Cannot convert {value!r} to a time value"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
