"""Tests for docker.configs parsing and grouping."""

from __future__ import annotations

import json
import random

import pytest

from sessiongrid.core.errors import ConfigError
from sessiongrid.docker.capabilities import Capabilities
from sessiongrid.docker.stereotypes import group_by_image, parse_image_configs

FIREFOX = json.dumps({"browserName": "firefox"})
CHROME = json.dumps({"browserName": "chrome"})
EDGE = json.dumps({"browserName": "MicrosoftEdge"})


def _as_sets(kinds):
    return {image: set(stereotypes) for image, stereotypes in kinds.items()}


class TestParsePairs:
    def test_pairs(self):
        configs = parse_image_configs(
            ["selenium/standalone-firefox", FIREFOX, "selenium/standalone-chrome", CHROME]
        )
        assert [c.image for c in configs] == [
            "selenium/standalone-firefox",
            "selenium/standalone-chrome",
        ]
        assert configs[1].stereotype == Capabilities(browserName="chrome")

    def test_empty(self):
        assert parse_image_configs([]) == []

    @pytest.mark.parametrize(
        "entries",
        [
            ["selenium/standalone-firefox"],
            ["selenium/standalone-firefox", FIREFOX, "selenium/standalone-chrome"],
        ],
    )
    def test_odd_length_raises(self, entries):
        with pytest.raises(ConfigError) as exc_info:
            parse_image_configs(entries)
        assert entries[-1] in exc_info.value.message
        assert exc_info.value.context.option == "configs"

    def test_malformed_payload_raises(self):
        with pytest.raises(ConfigError) as exc_info:
            parse_image_configs(["selenium/standalone-firefox", "{browserName: firefox"])
        assert exc_info.value.context.section == "docker"
        assert exc_info.value.context.image == "selenium/standalone-firefox"

    def test_image_must_be_a_string(self):
        with pytest.raises(ConfigError):
            parse_image_configs([42, FIREFOX])

    def test_mapping_payload_is_accepted(self):
        configs = parse_image_configs(["img", {"browserName": "firefox"}])
        assert configs[0].stereotype == Capabilities(browserName="firefox")


class TestParseRecords:
    def test_records(self):
        configs = parse_image_configs(
            [
                {"image": "selenium/standalone-firefox", "stereotype": {"browserName": "firefox"}},
                {"image": "selenium/standalone-chrome", "stereotype": CHROME},
            ]
        )
        assert [c.stereotype.browser_name for c in configs] == ["firefox", "chrome"]

    def test_missing_field_raises(self):
        with pytest.raises(ConfigError):
            parse_image_configs([{"image": "selenium/standalone-firefox"}])

    def test_mixed_shapes_raise(self):
        with pytest.raises(ConfigError, match="Cannot mix"):
            parse_image_configs(
                [{"image": "img", "stereotype": {}}, "selenium/standalone-chrome", CHROME]
            )


class TestGroupByImage:
    def test_image_with_several_stereotypes(self):
        kinds = group_by_image(
            parse_image_configs(["img-a", FIREFOX, "img-b", CHROME, "img-a", EDGE])
        )
        assert list(kinds) == ["img-a", "img-b"]
        assert kinds["img-a"] == [
            Capabilities(browserName="firefox"),
            Capabilities(browserName="MicrosoftEdge"),
        ]

    def test_duplicates_collapse(self):
        kinds = group_by_image(
            parse_image_configs(
                ["img-a", FIREFOX, "img-a", '{ "browserName" : "firefox" }', "img-a", FIREFOX]
            )
        )
        assert kinds == {"img-a": [Capabilities(browserName="firefox")]}

    def test_pair_order_does_not_change_result(self):
        pairs = [("img-a", FIREFOX), ("img-b", CHROME), ("img-a", EDGE), ("img-c", FIREFOX)]
        expected = _as_sets(
            group_by_image(parse_image_configs([x for pair in pairs for x in pair]))
        )

        rng = random.Random(1234)
        for _ in range(10):
            shuffled = pairs[:]
            rng.shuffle(shuffled)
            flat = [x for pair in shuffled for x in pair]
            assert _as_sets(group_by_image(parse_image_configs(flat))) == expected
