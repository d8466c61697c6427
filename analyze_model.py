import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import logging
import sys

from config import load_settings
from exceptions import MarkovError
from markov_model import LanguageModel
from text_processor import TextProcessor

logger = logging.getLogger(__name__)


def window_entropies(model):
    """
    Энтропия распределения следующего символа для каждого окна

    Returns:
        numpy.ndarray: энтропия в битах, в порядке окон модели
    """
    entropies = np.zeros(len(model.table))
    for i, occurrences in enumerate(model.table.values()):
        p = np.array([o.probability for o in occurrences])
        entropies[i] = -np.sum(p * np.log2(p))
    return entropies


def analyze_contexts(model):
    #Статистика по окнам модели
    stats = model.stats()

    print("\nАнализ модели Маркова:")
    print("-" * 40)
    print(f"Длина окна:              {stats['window_length']:>10}")
    print(f"Уникальных окон:         {stats['contexts']:>10,}")
    print(f"Всего переходов:         {stats['transitions']:>10,}")
    print(f"Макс. продолжений окна:  {stats['max_successors']:>10}")

    if stats['contexts']:
        entropies = window_entropies(model)
        print(f"Средняя энтропия:        {entropies.mean():>10.4f} бит")

    return stats


def analyze_specific_contexts(model, contexts, top=5):
    #Топ продолжений для заданных окон
    print("\nПРИМЕРЫ УСЛОВНЫХ ВЕРОЯТНОСТЕЙ")

    for context in contexts:
        probs = model.get_probabilities(context)
        if not probs:
            print(f"\nПосле {context!r}: нет данных")
            continue

        print(f"\nПосле {context!r}:")
        for symbol, prob in sorted(probs.items(), key=lambda x: x[1], reverse=True)[:top]:
            print(f"  {symbol!r}: {prob:.4f}")


def plot_successor_distribution(model, output_path='markov_analysis.png'):
    """Гистограммы числа продолжений и энтропии окон, сохраняются в PNG"""
    successors = [len(occurrences) for occurrences in model.table.values()]
    entropies = window_entropies(model)

    fig = plt.figure(figsize=(12, 5))

    # График 1: Число различных продолжений окна
    plt.subplot(1, 2, 1)
    plt.hist(successors, bins=max(successors, default=1), color='b', alpha=0.7)
    plt.xlabel('Различных продолжений окна')
    plt.ylabel('Количество окон')
    plt.title(f'Продолжения окон длины {model.window_length}')
    plt.grid(True, alpha=0.3)

    # График 2: Энтропия окон
    plt.subplot(1, 2, 2)
    plt.hist(entropies, bins=30, color='r', alpha=0.7)
    plt.xlabel('Энтропия (бит)')
    plt.ylabel('Количество окон')
    plt.title('Энтропия следующего символа')
    plt.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"Графики сохранены в '{output_path}'")

    return output_path


def analyze_overall_frequencies(text, top=20):
    #Общие частоты символов корпуса
    frequencies = TextProcessor.count_overall_frequencies(text)
    total = sum(frequencies.values())
    results = sorted(frequencies.items(), key=lambda x: x[1], reverse=True)[:top]

    print("\nОБЩИЕ ЧАСТОТЫ СИМВОЛОВ")
    print(f"\nТоп-{top} символов:")
    print("-" * 40)
    print(f"{'Символ':<10} {'Частота':<12} {'Вероятность':<12}")
    print("-" * 40)

    for symbol, freq in results:
        prob = freq / total if total > 0 else 0
        print(f"{symbol!r:<10} {freq:<12,} {prob:.6f}")

    return results


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
    # Графики только сохраняются в файл, окно не нужно
    matplotlib.use('Agg')

    corpus_path = argv[0] if argv else settings.corpus_path
    if not corpus_path:
        print("Укажите путь к корпусу аргументом или в CORPUS_PATH")
        return 1

    print("АНАЛИЗ МОДЕЛИ МАРКОВА")
    print("=" * 50)

    try:
        text = TextProcessor.read_text(corpus_path)
        if settings.normalize_text:
            text = TextProcessor.normalize_text(text)
        model = LanguageModel(settings.window_length, seed=settings.seed)
        model.train(text)
    except (MarkovError, OSError) as e:
        logger.error(f"Ошибка: {e}")
        return 1

    analyze_overall_frequencies(text)
    analyze_contexts(model)
    analyze_specific_contexts(model, list(model.table)[:5])
    plot_successor_distribution(model, settings.plot_path)

    print("\n" + "=" * 50)
    print("Анализ завершен!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
