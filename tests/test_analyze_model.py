import importlib

import matplotlib
import numpy as np
import pytest

import analyze_model
from markov_model import train


def test_window_entropies():
    model = train("xaxbxaxc", 1)
    entropies = analyze_model.window_entropies(model)

    # x -> a/b/c с вероятностями 1/2, 1/4, 1/4; a и b детерминированы
    assert entropies == pytest.approx(np.array([1.5, 0.0, 0.0]))


def test_analyze_contexts(capsys, trained_model):
    stats = analyze_model.analyze_contexts(trained_model)

    out = capsys.readouterr().out
    assert stats == trained_model.stats()
    assert "Уникальных окон" in out
    assert "Средняя энтропия" in out


def test_analyze_specific_contexts(capsys, trained_model):
    analyze_model.analyze_specific_contexts(trained_model, ["the", "zzz"])

    out = capsys.readouterr().out
    assert "' ': 1.0000" in out
    assert "После 'zzz': нет данных" in out


def test_plot_successor_distribution(tmp_path, trained_model):
    output = tmp_path / "plot.png"

    assert analyze_model.plot_successor_distribution(trained_model, str(output)) == str(output)
    assert output.read_bytes().startswith(b"\x89PNG")


def test_main(clean_env, monkeypatch, capsys, corpus):
    path = clean_env / "corpus.txt"
    path.write_text(corpus, encoding="utf-8")
    monkeypatch.setenv("PLOT_PATH", str(clean_env / "analysis.png"))

    assert analyze_model.main([str(path)]) == 0
    assert (clean_env / "analysis.png").exists()
    assert "Анализ завершен" in capsys.readouterr().out


def test_main_without_corpus(clean_env):
    assert analyze_model.main([]) == 1


def test_analyze_overall_frequencies(capsys):
    results = analyze_model.analyze_overall_frequencies("abacab", top=2)

    assert results == [("a", 3), ("b", 2)]
    out = capsys.readouterr().out
    assert "ОБЩИЕ ЧАСТОТЫ СИМВОЛОВ" in out
    assert "0.500000" in out
    assert "'c'" not in out


def test_main_prints_overall_frequencies(clean_env, monkeypatch, capsys, corpus):
    path = clean_env / "corpus.txt"
    path.write_text(corpus, encoding="utf-8")
    monkeypatch.setenv("PLOT_PATH", str(clean_env / "analysis.png"))

    assert analyze_model.main([str(path)]) == 0
    assert "Топ-20 символов" in capsys.readouterr().out


@pytest.mark.parametrize("name, value", [
    ("WINDOW_LENGTH", "three"),
    ("LOG_LEVEL", "VERBOSE"),
])
def test_main_with_malformed_setting(clean_env, monkeypatch, capsys, name, value):
    monkeypatch.setenv(name, value)

    assert analyze_model.main(["corpus.txt"]) == 1
    assert "Ошибка конфигурации" in capsys.readouterr().out


def test_backend_is_chosen_only_by_main(clean_env, monkeypatch, corpus):
    backends = []
    monkeypatch.setattr(matplotlib, "use", backends.append)

    importlib.reload(analyze_model)
    assert backends == []

    path = clean_env / "corpus.txt"
    path.write_text(corpus, encoding="utf-8")
    monkeypatch.setenv("PLOT_PATH", str(clean_env / "analysis.png"))
    assert analyze_model.main([str(path)]) == 0
    assert backends == ["Agg"]
