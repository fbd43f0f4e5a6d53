from numberlib.config import Config, load_config, save_config


def test_defaults_match_source():
    config = Config()
    assert config.refresh_time == 3
    assert config.verify_count == 3
    assert config.number_regex == "^([^\\-]+)----([^\\-]+)$"
    assert config.verify_code_regex == "(\\d{6})(?=[^\\d]*短信登录验证码)"


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "none.cfg") == Config()


def test_round_trip(tmp_path):
    path = tmp_path / "app.cfg"
    config = Config(7, 2, r"^(\w+)\|(.+)$", r"code:(\d{4})")
    save_config(path, config)
    assert load_config(path) == config


def test_saved_layout_is_four_lines(tmp_path):
    path = tmp_path / "app.cfg"
    config = Config(5, 4, "a", "b")
    save_config(path, config)
    assert path.read_text(encoding="utf-8") == "5\n4\na\nb\n"


def test_partial_file_keeps_remaining_defaults(tmp_path):
    path = tmp_path / "app.cfg"
    path.write_text("9\n", encoding="utf-8")
    config = load_config(path)
    assert config.refresh_time == 9
    assert config.verify_count == Config().verify_count
    assert config.number_regex == Config().number_regex
    assert config.verify_code_regex == Config().verify_code_regex


def test_numbers_are_read_leniently(tmp_path):
    path = tmp_path / "app.cfg"
    path.write_text("abc\n12abc\n", encoding="utf-8")
    config = load_config(path)
    assert config.refresh_time == 0
    assert config.verify_count == 12


def test_utf16_file_is_read(tmp_path):
    path = tmp_path / "app.cfg"
    path.write_bytes("4\n6\nx\n验证码(\\d+)\n".encode("utf-16"))
    config = load_config(path)
    assert config == Config(4, 6, "x", "验证码(\\d+)")