import pytest

from model import Entity, Runtime, ScratchList, Variable, VariableKind
from scope import list_name, resolve_name, sanitize, sprite_name, variable_name


class TestSanitize:
    def test_replaces_ascii_punctuation_and_space(self):
        assert sanitize("Avg(Total / Count)") == "Avg_Total___Count_"
        assert sanitize("List of Symbols.") == "List_of_Symbols_"

    def test_keeps_letters_digits_and_underscore(self):
        assert sanitize("abc_XYZ_019") == "abc_XYZ_019"

    def test_replaces_control_characters(self):
        assert sanitize("a\tb\nc\x00") == "a_b_c_"

    def test_keeps_non_ascii_characters(self):
        assert sanitize("平均(合計 / 件数)") == "平均_合計___件数_"
        assert sanitize("シンボル　配列。") == "シンボル　配列。"
        assert sanitize("café") == "café"

    @pytest.mark.parametrize(
        "name",
        ["", " ", "x", "!\"#$%&'()*+,-./", "Ünïcödé name", "混合 mixed-名前", "\x7f\x80\xff"],
    )
    def test_length_and_character_classes(self, name):
        result = sanitize(name)
        assert len(result) == len(name)
        for original, ch in zip(name, result):
            if ord(original) >= 128:
                assert ch == original
            else:
                assert ch == "_" or (ch.isascii() and ch.isalnum())


class TestResolveName:
    def test_local_names_use_instance_sigil(self, sprite):
        assert variable_name(sprite, "id1") == "@Variable1"
        assert list_name(sprite, "id2") == "@List1"
        assert variable_name(sprite, "id3") == "@Variable2"
        assert list_name(sprite, "id4") == "@List2"

    def test_stage_names_use_global_sigil(self, sprite):
        assert variable_name(sprite, "id5") == "$Variable3"
        assert list_name(sprite, "id6") == "$List3"

    def test_kind_mismatch_is_not_found(self, sprite):
        assert list_name(sprite, "id1") is None
        assert variable_name(sprite, "id2") is None
        assert list_name(sprite, "id5") is None
        assert variable_name(sprite, "id6") is None

    def test_unknown_id_is_not_found(self, sprite):
        assert variable_name(sprite, "unknown_id1") is None
        assert list_name(sprite, "unknown_id2") is None

    def test_stage_own_entries_use_global_sigil(self, sprite):
        sprite.is_stage = True
        assert variable_name(sprite, "id1") == "$Variable1"
        assert list_name(sprite, "id2") == "$List1"
        assert variable_name(sprite, "id3") == "$Variable2"
        assert list_name(sprite, "id4") == "$List2"

    def test_stage_does_not_fall_back(self, sprite):
        sprite.is_stage = True
        assert variable_name(sprite, "id5") is None
        assert list_name(sprite, "id6") is None

    def test_names_are_sanitized(self, sprite):
        assert variable_name(sprite, "id2_1") == "@Avg_Total___Count_"
        assert list_name(sprite, "id2_2") == "@List_of_Symbols_"
        assert variable_name(sprite, "id2_3") == "@" + "_" * 33
        assert variable_name(sprite, "id2_4") == "@平均_合計___件数_"
        assert list_name(sprite, "id2_5") == "@シンボル　配列。"

        sprite.is_stage = True
        assert variable_name(sprite, "id2_1") == "$Avg_Total___Count_"
        assert list_name(sprite, "id2_2") == "$List_of_Symbols_"
        assert variable_name(sprite, "id2_3") == "$" + "_" * 33
        assert variable_name(sprite, "id2_4") == "$平均_合計___件数_"
        assert list_name(sprite, "id2_5") == "$シンボル　配列。"

    def test_local_entry_shadows_stage_entry(self, runtime):
        stage = runtime.stage()
        stage.variables["shared"] = Variable(id="shared", name="Global")
        cat = runtime.add_target(Entity(name="Cat", variables={"shared": Variable(id="shared", name="Local")}))
        assert resolve_name(VariableKind.SCALAR, cat, "shared") == "@Local"

    def test_local_kind_mismatch_does_not_fall_back(self, runtime):
        stage = runtime.stage()
        stage.variables["shared"] = Variable(id="shared", name="Global")
        cat = runtime.add_target(Entity(name="Cat", variables={"shared": ScratchList(id="shared", name="Local")}))
        assert resolve_name(VariableKind.SCALAR, cat, "shared") is None
        assert resolve_name(VariableKind.LIST, cat, "shared") == "@Local"

    def test_sprite_without_stage_resolves_locally_only(self):
        runtime = Runtime()
        cat = runtime.add_target(Entity(name="Cat", variables={"v": Variable(id="v", name="speed")}))
        assert variable_name(cat, "v") == "@speed"
        assert variable_name(cat, "missing") is None

    def test_detached_sprite_resolves_locally_only(self):
        cat = Entity(name="Cat", variables={"v": Variable(id="v", name="speed")})
        assert variable_name(cat, "v") == "@speed"
        assert variable_name(cat, "missing") is None


def test_sprite_name_is_self():
    assert sprite_name() == "self"
