from chasegrid.geometry import Vec2D
from chasegrid.sprite import AIState, Color, Sprite, SpriteType


def test_display_string_pinned():
    s = Sprite(SpriteType.PREY, display_char="Y", color_code=Color.YELLOW)
    assert s.display_string() == "\033[33mY\033[0m"


def test_display_string_composes_colour_and_char():
    s = Sprite(SpriteType.PREDATOR, display_char="P", color_code=Color.RED)
    out = s.display_string()
    assert out.startswith(Color.RED)
    assert out.endswith(Color.RESET)
    assert out[len(Color.RED)] == "P"


def test_default_display_string_uses_white_and_question_mark():
    s = Sprite(SpriteType.PREY)
    assert s.display_string() == Color.WHITE + "?" + Color.RESET


def test_defaults_start_wandering_full_stamina():
    s = Sprite(SpriteType.PREDATOR)
    assert s.current_state is AIState.WANDERING
    assert s.current_stamina == s.max_stamina
    assert s.current_fear == 0.0
    assert s.position == Vec2D(0, 0)
    assert s.current_path == []


def test_mutable_defaults_not_shared():
    a = Sprite(SpriteType.PREY)
    b = Sprite(SpriteType.PREY)
    a.current_path.append(Vec2D(1, 1))
    a.recent_wander_trail.append(Vec2D(2, 2))
    assert b.current_path == []
    assert b.recent_wander_trail == []


def test_sprites_compare_by_identity():
    a = Sprite(SpriteType.PREY)
    b = Sprite(SpriteType.PREY)
    assert (a == b) is False
    assert a == a


def test_sprite_keeps_given_type_and_state():
    s = Sprite(SpriteType.PREDATOR, current_state=AIState["SEARCHING_LKP"])
    assert s.current_state is AIState.SEARCHING_LKP
    assert s.type is SpriteType.PREDATOR
    assert s.type is not SpriteType.PREY