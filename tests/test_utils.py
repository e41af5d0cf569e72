from novastrike.utils import circle_collide, clamp, rect_collide


def test_clamp_bounds():
    assert clamp(-5, 0, 100) == 0
    assert clamp(150, 0, 100) == 100
    assert clamp(42, 0, 100) == 42


def test_circle_collide_is_strict():
    # centres 25 apart with radii 5 + 20: touching, not overlapping
    assert not circle_collide(0, 0, 5, 25, 0, 20)
    assert circle_collide(0, 0, 5, 24.9, 0, 20)
    assert circle_collide(10, 10, 5, 10, 10, 20)


def test_circle_collide_diagonal():
    assert circle_collide(0, 0, 20, 20, 20, 15)  # distance ~28.3 < 35
    assert not circle_collide(0, 0, 5, 20, 20, 20)  # ~28.3 >= 25


def test_rect_collide():
    assert rect_collide(0, 0, 10, 10, 5, 5, 10, 10)
    assert not rect_collide(0, 0, 10, 10, 10, 0, 10, 10)  # shared edge
    assert not rect_collide(0, 0, 10, 10, 20, 20, 5, 5)
