from novastrike.canvas import ArrayCanvas, hex_to_rgb


def test_hex_to_rgb():
    assert hex_to_rgb("#00d4ff") == (0, 212, 255)
    assert hex_to_rgb("ff4040") == (255, 64, 64)


def test_fill_rect_is_centred():
    c = ArrayCanvas(20, 20, background="#000000")
    c.fill_rect(10, 10, 4, 4, "#ffffff")
    f = c.frame()
    assert tuple(f[8, 8]) == (255, 255, 255)
    assert tuple(f[11, 11]) == (255, 255, 255)
    assert tuple(f[12, 12]) == (0, 0, 0)
    assert tuple(f[7, 7]) == (0, 0, 0)


def test_alpha_blends_over_background():
    c = ArrayCanvas(4, 4, background="#000000")
    c.fill_rect(2, 2, 4, 4, "#ffffff", alpha=0.5)
    assert tuple(c.frame()[1, 1]) == (127, 127, 127)


def test_shapes_clip_at_edges():
    c = ArrayCanvas(10, 10, background="#000000")
    c.fill_circle(-50, -50, 5, "#ffffff")
    c.fill_rect(0, 0, 4, 4, "#ff0000")
    f = c.frame()
    assert tuple(f[0, 0]) == (255, 0, 0)
    assert tuple(f[5, 5]) == (0, 0, 0)


def test_fill_polygon_diamond():
    c = ArrayCanvas(20, 20, background="#000000")
    c.fill_polygon([(10, 2), (18, 10), (10, 18), (2, 10)], "#00ff00")
    f = c.frame()
    assert tuple(f[10, 10]) == (0, 255, 0)
    assert tuple(f[1, 1]) == (0, 0, 0)
    assert tuple(f[18, 18]) == (0, 0, 0)
