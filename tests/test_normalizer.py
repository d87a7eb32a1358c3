"""
Tests for data point normalization and raw/final joining.
"""

import copy

import pytest

from air_quality_graph.core import constants
from air_quality_graph.processing import (
    remove_unused_data,
    fix_negative_concentrations,
    trim_geo,
    restructure_data,
    normalize_graph_point,
    join_raw_into_final,
    needs_raw_data,
)


class TestRemoveUnusedData:
    """Test cases for remove_unused_data."""

    def test_removes_unused_and_ignores_missing_keys(self):
        keys_to_keep = ["test", "test4", "test6"]
        data_point = {"test": 1, "test2": 2, "test3": 3, "test4": {"four": 4, "five": 5}}

        result = remove_unused_data(data_point, keys_to_keep)

        assert result == {"test": 1, "test4": {"four": 4, "five": 5}}

    def test_does_not_mutate_input(self):
        data_point = {"co": 1, "co2": 2}
        remove_unused_data(data_point, ["co"])
        assert data_point == {"co": 1, "co2": 2}

    def test_idempotent(self):
        data_point = {"co": 1, "co2": 2, "sn": "SN1", "timestamp": "2020-04-02T22:54:48"}
        once = remove_unused_data(data_point, constants.GRAPH_NODE_KEYS)
        assert remove_unused_data(once, constants.GRAPH_NODE_KEYS) == once

    def test_latest_keys_are_superset_of_graph_keys(self):
        assert set(constants.GRAPH_NODE_KEYS) <= set(constants.LATEST_NODE_KEYS)


class TestFixNegativeConcentrations:
    """Test cases for fix_negative_concentrations."""

    def test_changes_negative_values_to_zero(self):
        keys_to_fix = ["test", "test2", "test6"]
        data_point = {"test": -1, "test2": -2, "test3": -3, "test4": {"four": -4, "five": 5}}

        result = fix_negative_concentrations(data_point, keys_to_fix)

        assert result == {"test": 0, "test2": 0, "test3": -3, "test4": {"four": -4, "five": 5}}

    def test_non_numeric_values_pass_through(self):
        data_point = {"co": "-1", "no": None, "o3": -0.5}
        result = fix_negative_concentrations(data_point)
        assert result == {"co": "-1", "no": None, "o3": 0}

    def test_default_keys_are_pollutants(self):
        data_point = {"pm25": -0.037, "temp_manifold": -4.0}
        result = fix_negative_concentrations(data_point)
        assert result == {"pm25": 0, "temp_manifold": -4.0}

    def test_idempotent(self):
        data_point = {"co": -1, "no2": 3, "pm25": -0.1}
        once = fix_negative_concentrations(data_point)
        assert fix_negative_concentrations(once) == once

    def test_does_not_mutate_input(self):
        data_point = {"co": -1}
        fix_negative_concentrations(data_point)
        assert data_point == {"co": -1}


class TestTrimGeo:
    """Test cases for trim_geo."""

    def test_trims_to_three_decimal_places(self):
        data_point = {"geo": {"lat": 32.8756, "lon": 5}}
        assert trim_geo(data_point) == {"geo": {"lat": 32.876, "lon": 5}}

    def test_no_geo_field(self):
        data_point = {"test": -1, "test4": {"four": -4, "five": 5}}
        assert trim_geo(data_point) == {"test": -1, "test4": {"four": -4, "five": 5}}

    def test_negative_coordinates(self):
        data_point = {"geo": {"lat": 42.38745, "lon": -71.10449}}
        assert trim_geo(data_point) == {"geo": {"lat": 42.387, "lon": -71.104}}

    @pytest.mark.parametrize("value, expected", [
        (42.3125, 42.313),
        (-71.0625, -71.063),
    ])
    def test_ties_round_away_from_zero(self, value, expected):
        assert trim_geo({"geo": {"lat": value, "lon": 0}})["geo"]["lat"] == expected

    def test_numeric_strings(self):
        assert trim_geo({"geo": {"lat": "42.38745", "lon": -71}}) == {"geo": {"lat": 42.387, "lon": -71}}

    def test_does_not_mutate_input(self):
        data_point = {"geo": {"lat": 1.33333, "lon": 5}}
        original = copy.deepcopy(data_point)
        trim_geo(data_point)
        assert data_point == original


class TestJoinRawIntoFinal:
    """Test cases for join_raw_into_final."""

    def test_matching_timestamps_merge_raw_fields(self):
        timestamp = "2020-04-02T23:54:48"
        final = {"co": 2, "timestamp": timestamp}
        raw = {"bin0": 1, "bin1": 4, "no_bin": 7, "timestamp": timestamp}

        result = join_raw_into_final(final, raw)

        assert result == {"co": 2, "bin0": 1, "bin1": 4, "timestamp": timestamp}
        assert constants.LAST_RAW_KEY not in result

    def test_matching_timestamps_overwrite(self):
        timestamp = "2020-04-02T23:54:48"
        result = join_raw_into_final({"bin0": 0, "timestamp": timestamp}, {"bin0": 9, "timestamp": timestamp})
        assert result["bin0"] == 9

    def test_mismatched_timestamps_add_last_raw(self):
        final = {"co": 2, "timestamp": "2020-04-02T23:54:48"}
        raw = {"bin0": 12, "co": 99, "timestamp": "2020-04-02T23:55:10"}

        result = join_raw_into_final(final, raw)

        assert result == {
            "co": 2,
            "timestamp": "2020-04-02T23:54:48",
            "lastRaw": {"bin0": 12, "timestamp": "2020-04-02T23:55:10", "timestamp_local": None},
        }

    def test_mismatched_timestamps_never_set_raw_fields_directly(self):
        final = {"timestamp": "2020-04-02T23:54:48"}
        raw = {"bin0": 12, "bin3": 2, "timestamp": "2020-04-02T23:55:10",
               "timestamp_local": "2020-04-02T19:55:10"}

        result = join_raw_into_final(final, raw)

        assert not any(key in result for key in constants.RAW_KEYS)
        assert result["lastRaw"]["timestamp_local"] == "2020-04-02T19:55:10"

    def test_no_raw_data_point(self):
        final = {"co": 2, "timestamp": "2020-04-02T23:54:48"}
        assert join_raw_into_final(final, None) == final


class TestNeedsRawData:
    """Test cases for needs_raw_data."""

    def test_missing_raw_fields(self):
        assert needs_raw_data({"co": 2})

    def test_partially_missing_raw_fields(self):
        assert needs_raw_data({"bin0": 0})

    def test_all_raw_fields_present(self):
        data_point = {key: 0 for key in constants.RAW_KEYS}
        assert not needs_raw_data(data_point)


class TestRestructureData:
    """Test cases for restructure_data."""

    def test_adds_raw_removes_unused_fixes_negatives_and_trims_geo(self):
        timestamp = "2020-04-02T23:54:48"
        final = {"co": 2, "co2": 5, "no": -1, "timestamp": timestamp, "geo": {"lat": 1.33333, "lon": 5}}
        raw = {"bin0": 1, "timestamp": timestamp}

        result = restructure_data(final, raw)

        assert result == {"co": 2, "bin0": 1, "no": 0, "timestamp": timestamp, "geo": {"lat": 1.333, "lon": 5}}

    def test_adds_raw_data_in_last_raw_node(self):
        geo = {"lat": 1.333, "lon": 5}
        timestamp = "2020-04-02T23:54:48"
        final = {"timestamp": timestamp, "geo": geo}
        raw = {"bin0": 1, "timestamp": "2020-04-02T23:54:49", "timestamp_local": "2020-04-02T23:54:49"}

        result = restructure_data(final, raw)

        assert result == {"timestamp": timestamp, "geo": geo, "lastRaw": raw}

    def test_last_raw_without_local_timestamp(self):
        final = {"timestamp": "2020-04-02T23:54:48"}
        raw = {"bin0": 12, "timestamp": "2020-04-02T23:54:49"}

        result = restructure_data(final, raw)

        assert result["lastRaw"] == {"bin0": 12, "timestamp": "2020-04-02T23:54:49", "timestamp_local": None}

    def test_does_not_mutate_inputs(self):
        final = {"no": -1, "timestamp": "2020-04-02T23:54:48", "geo": {"lat": 1.33333, "lon": 5}}
        raw = {"bin0": 1, "timestamp": "2020-04-02T23:54:48"}
        final_copy, raw_copy = copy.deepcopy(final), copy.deepcopy(raw)

        restructure_data(final, raw)

        assert final == final_copy
        assert raw == raw_copy


@pytest.mark.unit
def test_normalize_graph_point():
    sample = {
        "co": -3.2,
        "co2": 410,
        "no2": 7.1,
        "wind_speed": 2.0,
        "geo": {"lat": 42.38745, "lon": -71.0},
        "sn": "SN000-072",
        "timestamp": "2020-04-02T22:54:48",
        "timestamp_local": "2020-04-02T18:54:48",
    }

    assert normalize_graph_point(sample) == {
        "co": 0,
        "no2": 7.1,
        "sn": "SN000-072",
        "timestamp": "2020-04-02T22:54:48",
        "timestamp_local": "2020-04-02T18:54:48",
    }
