"""Tests for districts.py registry and address matching."""
import pytest

from parkreport.location.districts import (
    POLICE_STATIONS,
    District,
    find_district,
    find_station_by_address,
    normalize_address,
    station_for,
)


class TestRegistry:
    def test_one_station_per_district(self):
        """Registry holds exactly one station for each of the 22 districts."""
        assert len(POLICE_STATIONS) == 22
        assert {s.district for s in POLICE_STATIONS} == set(District)

    def test_station_for_returns_matching_entry(self):
        station = station_for(District.Kaohsiung)
        assert station.station_name == "高雄市政府警察局"
        assert station.phone_number == "0911510917"

    def test_district_names_do_not_overlap(self):
        """No canonical name is contained in another."""
        names = [d.value for d in District]
        for a in names:
            for b in names:
                if a != b:
                    assert a not in b


class TestNormalisation:
    def test_replaces_every_informal_tai(self):
        assert normalize_address("台北市台灣大道") == "臺北市臺灣大道"

    def test_leaves_canonical_text_unchanged(self):
        assert normalize_address("新北市板橋區") == "新北市板橋區"


class TestFindDistrict:
    def test_informal_and_canonical_forms_match_the_same(self):
        assert find_district("台中市西屯區某路") == find_district("臺中市西屯區某路")
        assert find_district("台中市西屯區某路") is District.Taichung

    def test_unknown_place_returns_none(self):
        assert find_district("某個不存在的地方") is None

    def test_empty_address_returns_none(self):
        assert find_district("") is None

    @pytest.mark.parametrize(
        "address,expected",
        [
            ("新竹縣竹北市光明六路10號", District.HsinchuCounty),
            ("新竹市東區光復路二段101號", District.HsinchuCity),
            ("嘉義縣太保市祥和一路東段1號", District.ChiayiCounty),
            ("台東縣台東市中山路276號", District.Taitung),
            ("連江縣南竿鄉介壽村", District.Lienchiang),
        ],
    )
    def test_city_and_county_variants_are_distinguished(self, address, expected):
        assert find_district(address) is expected

    def test_district_found_mid_string(self):
        """The district may appear after a postcode or other prefix."""
        assert find_district("110 台北市信義區") is District.Taipei


class TestFindStationByAddress:
    def test_returns_station_for_match(self):
        station = find_station_by_address("宜蘭縣頭城鎮中正路100號")
        assert station is not None
        assert station.district is District.Yilan

    def test_returns_none_without_match(self):
        assert find_station_by_address("Tokyo") is None
