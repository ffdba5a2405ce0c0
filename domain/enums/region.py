"""Region enumeration for League of Legends servers."""
from enum import Enum


class Region(Enum):
    """Platform a configured account lives on.

    ``regional_route`` is the routing host for account-v1 and match-v5.
    """

    EUW1 = "euw1"
    EUN1 = "eun1"
    NA1 = "na1"
    BR1 = "br1"
    LA1 = "la1"
    LA2 = "la2"
    KR = "kr"
    JP1 = "jp1"
    OC1 = "oc1"
    PH2 = "ph2"
    SG2 = "sg2"
    TH2 = "th2"
    TW2 = "tw2"
    VN2 = "vn2"
    TR1 = "tr1"
    RU = "ru"
    ME1 = "me1"

    @property
    def platform_route(self) -> str:
        return self.value

    @property
    def regional_route(self) -> str:
        return _REGIONAL_ROUTES.get(self.value, "americas")

    @property
    def friendly(self) -> str:
        """Short label as players write it (euw, na, oce...)."""
        if self.value in _FRIENDLY:
            return _FRIENDLY[self.value]
        code = self.value
        return code[:-1] if code and code[-1].isdigit() else code

    @classmethod
    def from_string(cls, value: str) -> 'Region':
        """Accept a platform id (``euw1``) or a friendly label (``EUW``)."""
        key = value.strip().lower()
        for region in cls:
            if key in (region.value, region.friendly):
                return region
        raise ValueError(f"Unknown region '{value}'")

    @classmethod
    def all_regions(cls) -> list['Region']:
        return list(cls)


_REGIONAL_ROUTES = {
    "na1": "americas",
    "br1": "americas",
    "la1": "americas",
    "la2": "americas",
    "euw1": "europe",
    "eun1": "europe",
    "tr1": "europe",
    "ru": "europe",
    "me1": "europe",
    "kr": "asia",
    "jp1": "asia",
    "oc1": "sea",
    "ph2": "sea",
    "sg2": "sea",
    "th2": "sea",
    "tw2": "sea",
    "vn2": "sea",
}

_FRIENDLY = {
    "eun1": "eune",
    "euw1": "euw",
    "la1": "lan",
    "la2": "las",
    "oc1": "oce",
}
