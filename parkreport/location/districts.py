"""District registry and free-text address → district matching.

Every report is routed to exactly one police station, chosen by the
top-level administrative district (直轄市 / 縣 / 市) the address falls in.

Matching pipeline:
  1. Normalise the informal character 台 to the canonical 臺.
  2. Scan the registry in its defined order; the first district name that
     occurs as a substring of the normalised address wins.

District names are pairwise non-overlapping substrings, so scan order only
matters as a deterministic tie-break.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

INFORMAL_TAI = "台"
CANONICAL_TAI = "臺"


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


class District(str, Enum):
    """The 22 cities and counties a report can be routed to."""

    Taipei = "臺北市"
    NewTaipei = "新北市"
    Taoyuan = "桃園市"
    Taichung = "臺中市"
    Tainan = "臺南市"
    Kaohsiung = "高雄市"
    Keelung = "基隆市"
    HsinchuCity = "新竹市"
    ChiayiCity = "嘉義市"
    HsinchuCounty = "新竹縣"
    Miaoli = "苗栗縣"
    Changhua = "彰化縣"
    Nantou = "南投縣"
    Yunlin = "雲林縣"
    ChiayiCounty = "嘉義縣"
    Pingtung = "屏東縣"
    Yilan = "宜蘭縣"
    Hualien = "花蓮縣"
    Taitung = "臺東縣"
    Penghu = "澎湖縣"
    Kinmen = "金門縣"
    Lienchiang = "連江縣"


@dataclass(frozen=True)
class PoliceStation:
    district: District
    station_name: str
    phone_number: str


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

#: One receiving station per district, in matching order.
POLICE_STATIONS: tuple[PoliceStation, ...] = (
    PoliceStation(District.Taipei, "臺北市政府警察局", "0911510914"),
    PoliceStation(District.NewTaipei, "新北市政府警察局", "0911510105"),
    PoliceStation(District.Taoyuan, "桃園市政府警察局", "0917110880"),
    PoliceStation(District.Taichung, "臺中市政府警察局", "0911510915"),
    PoliceStation(District.Tainan, "臺南市政府警察局", "0911510916"),
    PoliceStation(District.Kaohsiung, "高雄市政府警察局", "0911510917"),
    PoliceStation(District.Keelung, "基隆市警察局", "0911510918"),
    PoliceStation(District.HsinchuCity, "新竹市警察局", "0911510919"),
    PoliceStation(District.ChiayiCity, "嘉義市政府警察局", "0911510920"),
    PoliceStation(District.HsinchuCounty, "新竹縣政府警察局", "0911510921"),
    PoliceStation(District.Miaoli, "苗栗縣警察局", "0911510922"),
    PoliceStation(District.Changhua, "彰化縣警察局", "0911510933"),
    PoliceStation(District.Nantou, "南投縣政府警察局", "0911510923"),
    PoliceStation(District.Yunlin, "雲林縣警察局", "0911510924"),
    PoliceStation(District.ChiayiCounty, "嘉義縣警察局", "0911510925"),
    PoliceStation(District.Pingtung, "屏東縣政府警察局", "0911510926"),
    PoliceStation(District.Yilan, "宜蘭縣政府警察局", "0911510927"),
    PoliceStation(District.Hualien, "花蓮縣警察局", "0911510928"),
    PoliceStation(District.Taitung, "臺東縣警察局", "0911510929"),
    PoliceStation(District.Penghu, "澎湖縣政府警察局", "0911510930"),
    PoliceStation(District.Kinmen, "金門縣警察局", "0911510931"),
    PoliceStation(District.Lienchiang, "連江縣警察局", "0911510932"),
)

_BY_DISTRICT: dict[District, PoliceStation] = {s.district: s for s in POLICE_STATIONS}


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


def normalize_address(address: str) -> str:
    """Replace every informal 台 with the canonical 臺."""
    return address.replace(INFORMAL_TAI, CANONICAL_TAI)


def find_district(address: str) -> Optional[District]:
    """Return the district named in *address*, or None when none is found.

    Args:
        address: Free-text address, e.g. "台中市西屯區台灣大道三段99號".

    Returns:
        The first registry district whose canonical name occurs in the
        normalised address, or None.
    """
    normalized = normalize_address(address)
    for station in POLICE_STATIONS:
        if station.district.value in normalized:
            return station.district
    return None


def station_for(district: District) -> PoliceStation:
    return _BY_DISTRICT[district]


def find_station_by_address(address: str) -> Optional[PoliceStation]:
    district = find_district(address)
    if district is None:
        return None
    return station_for(district)
