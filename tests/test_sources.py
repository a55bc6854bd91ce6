"""Tests for source profiles, deployments, rooms and the built-in catalog."""

from dataclasses import replace

import pytest

from sonicfield.sources import (
    DEFAULT_ELEMENT_PITCH,
    ROOM_PRESETS,
    SPEAKERS,
    AcousticSourceProfile,
    CenterFillConfig,
    DeploymentConfiguration,
    DeploymentMode,
    RoomDimensions,
    SourceType,
    center_fill_profiles,
    get_profile,
    list_profiles,
    main_profiles,
    require_profile,
    subwoofer_profiles,
)


class TestProfiles:
    def test_line_array_source_flag(self, line_array, point_source):
        assert line_array.is_line_array_source
        assert not point_source.is_line_array_source

    def test_non_arrayable_line_array_is_not_a_line_source(self, line_array):
        assert not replace(line_array, arrayable=False).is_line_array_source

    def test_defaults(self):
        profile = AcousticSourceProfile(
            id="x", brand="B", model="M", type=SourceType.COLUMN,
            max_spl=120.0, horz_dispersion=120.0, vert_dispersion=30.0,
        )
        assert profile.element_pitch == DEFAULT_ELEMENT_PITCH
        assert profile.coupling_coefficient == 0.0
        assert not profile.arrayable
        assert profile.display_name == "B M"

    def test_profiles_are_immutable(self, point_source):
        with pytest.raises(AttributeError):
            point_source.max_spl = 140.0


class TestDeployment:
    def test_defaults(self):
        deployment = DeploymentConfiguration(speaker_id="x")
        assert deployment.quantity == 1
        assert deployment.deployment_mode is DeploymentMode.SINGLE_CENTER
        assert deployment.center_fill == CenterFillConfig()
        assert not deployment.center_fill.enabled
        assert deployment.center_fill.height == pytest.approx(1.2)


class TestRoomDimensions:
    def test_derived_values(self):
        room = RoomDimensions(width=10.0, depth=12.0, height=4.0)
        assert room.floor_area == pytest.approx(120.0)
        assert room.volume == pytest.approx(480.0)

    @pytest.mark.parametrize("name", list(ROOM_PRESETS))
    def test_presets(self, name):
        room = RoomDimensions.from_preset(name)
        assert (room.width, room.depth, room.height) == ROOM_PRESETS[name]

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown room preset"):
            RoomDimensions.from_preset("stadium")


class TestCatalog:
    def test_lookup(self):
        profile = get_profile("meyer-lina")
        assert profile is not None
        assert profile.type is SourceType.LINE_ARRAY

    def test_lookup_is_case_insensitive(self):
        assert get_profile("MEYER-LINA") is get_profile("meyer-lina")

    @pytest.mark.parametrize("profile_id", [None, "", "does-not-exist"])
    def test_missing_profile_is_none(self, profile_id):
        assert get_profile(profile_id) is None

    def test_require_profile_raises(self):
        with pytest.raises(KeyError, match="not found"):
            require_profile("does-not-exist")

    def test_ids_match_keys(self):
        assert all(key == profile.id for key, profile in SPEAKERS.items())

    def test_filters(self):
        assert list_profiles() == list(SPEAKERS.values())
        assert all(p.type is SourceType.SUBWOOFER for p in subwoofer_profiles())
        assert all(p.type is not SourceType.SUBWOOFER for p in main_profiles())
        assert all(p.center_fill_capable for p in center_fill_profiles())
        assert len(main_profiles()) + len(subwoofer_profiles()) == len(SPEAKERS)

    def test_catalog_values_are_sane(self):
        for profile in SPEAKERS.values():
            assert 100.0 < profile.max_spl < 160.0
            assert profile.horz_dispersion > 0
            assert profile.vert_dispersion > 0
            assert 0.0 <= profile.coupling_coefficient <= 1.0
