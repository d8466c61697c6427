import pytest

from markov_model import LanguageModel

CORPUS = (
    "the cat sat on the mat. the cat ate the rat. "
    "a rat sat on a cat and the cat ran at the rat.\n"
)

ENV_VARS = (
    'CORPUS_PATH', 'WINDOW_LENGTH', 'SEED', 'GENERATE_LENGTH',
    'INITIAL_TEXT', 'NORMALIZE_TEXT', 'LOG_LEVEL', 'PLOT_PATH',
)


@pytest.fixture
def corpus():
    return CORPUS


@pytest.fixture
def trained_model():
    return LanguageModel(3, seed=42).train(CORPUS)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # Изолируем тест от переменных окружения; setenv запоминает исходное
    # состояние, поэтому значения, выставленные load_dotenv, удалятся после теста
    for name in ENV_VARS:
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
