from datetime import datetime
from functools import wraps

default_settings = {
    # Wall-clock zone for naive values: an IANA name, a UTC offset ("+02:00"),
    # a known abbreviation ("CET") or "local".
    "TIMEZONE": "UTC",
    # Reference instant; None means "now" at parse time.
    "RELATIVE_BASE": None,
    "WITH_LATENT": False,
    # Number of extra occurrences reported for ambiguous time expressions.
    "ALTERNATIVES": 3,
    "MAX_ROUNDS": 64,
    "DEFAULT_LOCALE": "en_US",
}


class Settings:
    """Control and configure default parsing behavior of dimparser.
    Currently, supported settings are:

    * `TIMEZONE`
    * `RELATIVE_BASE`
    * `WITH_LATENT`
    * `ALTERNATIVES`
    * `MAX_ROUNDS`
    * `DEFAULT_LOCALE`
    """

    _default = True
    _mod_settings = dict()

    def __init__(self, settings=None):
        if settings:
            self._updateall(settings.items())
        else:
            self._updateall(default_settings.items())

    def _updateall(self, iterable):
        for key, value in iterable:
            setattr(self, key, value)

    def replace(self, mod_settings=None, **kwds):
        for k, v in kwds.items():
            if v is None and k != "RELATIVE_BASE":
                raise TypeError('Invalid {{"{}": {}}}'.format(k, v))

        for x in default_settings.keys():
            kwds.setdefault(x, getattr(self, x))

        kwds["_default"] = False
        if mod_settings:
            kwds["_mod_settings"] = mod_settings

        return self.__class__(settings=kwds)


settings = Settings()


def apply_settings(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        mod_settings = kwargs.get("settings")

        kwargs["settings"] = mod_settings or settings

        if isinstance(kwargs["settings"], dict):
            kwargs["settings"] = settings.replace(
                mod_settings=mod_settings, **kwargs["settings"]
            )

        if not isinstance(kwargs["settings"], Settings):
            raise TypeError(
                "settings can only be either dict or instance of Settings class"
            )

        return f(*args, **kwargs)

    return wrapper


class SettingValidationError(ValueError):
    pass


def _check_positive(setting_name, setting_value):
    if setting_value < 0:
        raise SettingValidationError(
            '"{}" must be a non-negative integer, got {}'.format(
                setting_name, setting_value
            )
        )


def _check_rounds(setting_name, setting_value):
    if setting_value < 1:
        raise SettingValidationError(
            '"{}" must be at least 1, got {}'.format(setting_name, setting_value)
        )


def _check_relative_base(setting_name, setting_value):
    if setting_value.tzinfo is None or setting_value.utcoffset() is None:
        raise SettingValidationError(
            '"{}" must be timezone aware, got naive {!r}'.format(
                setting_name, setting_value
            )
        )


def _check_timezone(setting_name, setting_value):
    from dimparser.utils import get_timezone_from_tz_string

    try:
        get_timezone_from_tz_string(setting_value)
    except ValueError as e:
        raise SettingValidationError('"{}": {}'.format(setting_name, e))


def check_settings(settings):
    """
    Check if provided settings are valid, if not it raises `SettingValidationError`.
    Only checks for the modified settings.
    """
    settings_values = {
        "TIMEZONE": {
            "type": str,
            "extra_check": _check_timezone,
        },
        "RELATIVE_BASE": {
            "type": datetime,
            "extra_check": _check_relative_base,
        },
        "WITH_LATENT": {
            "type": bool,
        },
        "ALTERNATIVES": {
            "type": int,
            "extra_check": _check_positive,
        },
        "MAX_ROUNDS": {
            "type": int,
            "extra_check": _check_rounds,
        },
        "DEFAULT_LOCALE": {
            "type": str,
        },
    }

    modified_settings = settings._mod_settings  # check only modified settings

    # check settings keys:
    for setting in modified_settings:
        if setting not in settings_values:
            raise SettingValidationError('"{}" is not a valid setting'.format(setting))

    for setting_name, setting_value in modified_settings.items():
        setting_type = type(setting_value)
        setting_props = settings_values[setting_name]

        # check type:
        if setting_value is None and setting_name == "RELATIVE_BASE":
            continue
        if not issubclass(setting_type, setting_props["type"]) or (
            setting_props["type"] is int and setting_type is bool
        ):
            raise SettingValidationError(
                '"{}" must be "{}", not "{}".'.format(
                    setting_name, setting_props["type"].__name__, setting_type.__name__
                )
            )

        # specific checks
        extra_check = setting_props.get("extra_check")
        if extra_check:
            extra_check(setting_name, setting_value)
