import sys

import check_env


def test_missing_env_file_gets_template(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(check_env, "__file__", str(tmp_path / "check_env.py"))

    assert check_env.main() == 1

    template = (tmp_path / ".env").read_text(encoding="utf-8")
    assert "SALON_SUPABASE_KEY=" in template
    assert "SALON_QUERY_CACHE_MAX_ENTRIES=1024" in template
    assert "Created template .env" in capsys.readouterr().out


def test_supabase_key_is_masked(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(check_env, "__file__", str(tmp_path / "check_env.py"))
    monkeypatch.setattr(sys, "path", list(sys.path))
    key = "k" * 40
    (tmp_path / ".env").write_text(f"# comment\nSALON_SUPABASE_KEY={key}\nSALON_LOG_LEVEL=DEBUG\n", encoding="utf-8")

    check_env.main()

    out = capsys.readouterr().out
    assert f"SALON_SUPABASE_KEY={'k' * 20}...{'k' * 10}" in out
    assert key not in out
    assert "SALON_LOG_LEVEL=DEBUG" in out
    assert "# comment" not in out
