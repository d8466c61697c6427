from markov_model import LanguageModel
from analyze_model import analyze_contexts
from config import load_settings
from exceptions import MarkovError
import os
import sys
import logging

logger = logging.getLogger(__name__)

# Возможные имена файлов корпуса
POSSIBLE_FILES = [
    "texts.txt",
    "data.txt",
    "corpus.txt",
    "input.txt",
]


def find_corpus(argv, settings):
    """Поиск текстового файла: аргумент, CORPUS_PATH, затем известные имена"""
    if argv:
        return argv[0]
    if settings.corpus_path:
        return settings.corpus_path
    for file in POSSIBLE_FILES:
        if os.path.exists(file):
            return file
    return None


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        settings = load_settings()
    except MarkovError as e:
        print(f"Ошибка конфигурации: {e}")
        return 1
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    print("=" * 60)
    print("СИМВОЛЬНАЯ МОДЕЛЬ МАРКОВА")
    print("=" * 60)

    print("\n1. Поиск текстового файла...")
    text_file = find_corpus(argv, settings)
    if not text_file or not os.path.exists(text_file):
        print(f"Файл '{text_file or ''}' не найден!")
        print("Передайте путь аргументом или задайте CORPUS_PATH в .env")
        return 1

    print(f"✓ Найден файл: {text_file}")
    file_size = os.path.getsize(text_file) / (1024 * 1024)
    print(f"  Размер: {file_size:.2f} МБ")

    print(f"\n2. Обучение модели (длина окна {settings.window_length})...")
    try:
        model = LanguageModel(settings.window_length, seed=settings.seed)
        model.train_from_file(text_file, normalize=settings.normalize_text)
    except (MarkovError, OSError) as e:
        logger.error(f"Ошибка обучения: {e}")
        return 1

    analyze_contexts(model)

    # Без начального текста начинаем с первого окна корпуса
    initial_text = settings.initial_text or next(iter(model.table), '')
    if not initial_text:
        print("\nМодель пуста: корпус не длиннее окна")
        return 0

    print("\n" + "=" * 60)
    print(f"Генерация текста из '{initial_text}' ({settings.generate_length} символов):")
    print("-" * 40)
    try:
        generated = model.generate(initial_text, settings.generate_length)
    except ValueError as e:
        logger.error(f"Ошибка генерации: {e}")
        return 1
    print(generated)
    print("-" * 40)

    if generated == initial_text and settings.generate_length > 0:
        print("Окно начального текста не встречалось в корпусе, текст не сгенерирован")

    return 0


if __name__ == "__main__":
    sys.exit(main())
