from enum import Enum


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> 'Theme':
        return Theme.DARK if self == Theme.LIGHT else Theme.LIGHT
