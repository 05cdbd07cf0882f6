import pytest

from p8lua.patch import (
    IncludeError,
    find_includes,
    patch_includes,
    patch_lua,
    try_patch_includes,
    was_patched,
)


def test_not_equal_replacement():
    assert "a ~= b" in patch_lua("if a != b then print(a) end")


def test_comment_replacement():
    patched = patch_lua("// this is a comment\nprint('hello')")
    assert "-- this is a comment" in patched


@pytest.mark.parametrize(
    ("lua", "expected"),
    [
        ("if (not b) i = 1\n", "if not b then i = 1 end\n"),
        ("if (not b) i = 1 // hi\n", "if not b then i = 1 end -- hi\n"),
        ("if (not b and not c) i = 1\n", "if not b and not c then i = 1 end\n"),
    ],
)
def test_shorthand_if_rewrite(lua, expected):
    assert patch_lua(lua) == expected


def test_assignment_operator_rewrite():
    assert patch_lua("x += 1").strip() == "x = x + (1)"


def test_question_print_conversion0():
    assert patch_lua("?x").strip() == "print(x)"


def test_question_print_conversion():
    assert patch_lua("?x + y").strip() == "print(x + y)"


def test_binary_literal_conversion_integer():
    assert patch_lua("a = 0b1010").strip() == "a = 0xa"


def test_binary_literal_conversion_fractional():
    assert patch_lua("a = 0b1010.1").strip() == "a = 0xa.8"


def test_binary_literal_needs_preceding_character():
    assert patch_lua("0b1010") == "0b1010"


def test_mixed_transforms():
    lua = """
        // comment
        if (a != b) x += 1
        ?x
        """
    patched = patch_lua(lua)
    assert "-- comment" in patched
    assert "if a ~= b then x = x + (1) end" in patched
    assert "print(x)" in patched


def test_no_change_not_patched():
    lua = "x = 1"
    patched = patch_lua(lua)
    assert patched == lua
    assert was_patched(lua, patched) is False


def test_change_is_patched():
    lua = "x += 1"
    assert was_patched(lua, patch_lua(lua)) is True


def test_includes():
    lua = """
        #include blah.p8
        """
    patched = patch_includes(lua, lambda path: f"-- INCLUDE {path}")
    assert "-- INCLUDE blah.p8" in patched


def test_try_patch_includes_success():
    lua = "\n#include blah.p8\n"
    patched = try_patch_includes(lua, lambda path: f"-- INCLUDE {path}")
    assert "-- INCLUDE blah.p8" in patched
    assert "#include" not in patched


def test_try_patch_includes_reports_first_error():
    seen = []

    def resolve(path):
        seen.append(path)
        raise FileNotFoundError(path)

    lua = "#include a.p8\n#include b.p8\n"
    with pytest.raises(IncludeError) as info:
        try_patch_includes(lua, resolve)
    assert info.value.path == "a.p8"
    assert isinstance(info.value.cause, FileNotFoundError)
    assert seen == ["a.p8", "b.p8"]


def test_bad_comment():
    assert patch_lua("--==configurations==--").strip() == "--==configurations==--"


def test_bad_if():
    lua = "if (ord(tb.str[tb.i],tb.char)!=32) sfx(tb.voice) -- play the voice sound effect."
    assert (
        patch_lua(lua).strip()
        == "if ord(tb.str[tb.i],tb.char)~=32 then sfx(tb.voice) end -- play the voice sound effect."
    )


def test_bad_incr():
    lua = "tb.i+=1 -- increase the index, to display the next message on tb.str"
    assert (
        patch_lua(lua).strip()
        == "tb.i = tb.i + (1) -- increase the index, to display the next message on tb.str"
    )


@pytest.mark.parametrize(
    ("lua", "expected"),
    [
        ("if btnp(➡️) or btn(❎) then", "if btnp(1) or btn(5) then"),
        ("if btnp(❎) then", "if btnp(5) then"),
        ("if btnp(🅾) then", "if btnp(4) then"),
    ],
)
def test_button(lua, expected):
    assert patch_lua(lua).strip() == expected


def test_cardboard_toad0():
    assert (
        patch_lua(
            "if (o.color) setmetatable(o.color, { __index = (message_instance or message).color })"
        )
        == "if o.color then setmetatable(o.color, { __index = (message_instance or message).color }) end"
    )


def test_cardboard_toad1():
    lua = """
if ((abs(x) < (a.w+a2.w)) and
    (abs(y) < (a.h+a2.h)))
    then "hi" end
"""
    assert patch_lua(lua) == lua


def test_cardboard_toad2():
    lua = """
 if (self.sprites ~= nil) then
  self.sprite = self.sprites[self.sprites_index]
 end
"""
    assert patch_lua(lua) == lua


@pytest.mark.parametrize(
    ("lua", "expected"),
    [
        ("accum += f.delay or self.delay", "accum = accum + (f.delay or self.delay)"),
        (
            "if true then accum += f.delay or self.delay end",
            "if true then accum = accum + (f.delay or self.delay) end",
        ),
    ],
)
def test_cardboard_toad3(lua, expected):
    assert patch_lua(lua) == expected


@pytest.mark.parametrize(
    ("lua", "expected"),
    [
        (
            "if btnp(3) then self.choice += 1; result = true end",
            "if btnp(3) then self.choice = self.choice + (1); result = true end",
        ),
        ("       i += 1", "       i = i + (1)"),
    ],
)
def test_pooh_big_adventure0(lua, expected):
    assert patch_lua(lua) == expected


def test_plist0():
    lua = """
i += 1
local key = keys[i]
"""
    assert "i = i + (1)" in patch_lua(lua)


def test_find_includes():
    lua = """
#include a.p8
#include b.lua
"""
    assert list(find_includes(lua)) == ["a.p8", "b.lua"]


def test_find_includes_none():
    assert list(find_includes("x = 1\n")) == []


def test_patch_lua_is_idempotent_on_plain_lua():
    lua = "local a = 1\nif a ~= 2 then print(a) end\n"
    assert patch_lua(patch_lua(lua)) == lua