from text_processor import TextProcessor
from exceptions import InvalidWindowLength, ModelAlreadyTrainedError
from dataclasses import dataclass
from types import MappingProxyType
import random
import time
import logging

logger = logging.getLogger(__name__)

# Символ, возвращаемый при выборке, если ни одна накопленная вероятность не превысила r
FALLBACK_CHAR = ' '


@dataclass(frozen=True)
class CharOccurrence:
    character: str
    count: int
    probability: float
    cumulative_probability: float

    def __str__(self):
        return f"({self.character} {self.count} {self.probability} {self.cumulative_probability})"


def sample(occurrences, random_source):
    """
    Выбор случайного символа по накопленным вероятностям

    Args:
        occurrences: список CharOccurrence одного окна
        random_source: объект с методом random(), возвращающим число из [0, 1)

    Returns:
        str: первый символ, чья накопленная вероятность больше r,
             или FALLBACK_CHAR, если такого нет
    """
    r = random_source.random()
    for occurrence in occurrences:
        if occurrence.cumulative_probability > r:
            return occurrence.character

    logger.debug(f"Ни одна накопленная вероятность не превысила r={r!r}, возвращаем {FALLBACK_CHAR!r}")
    return FALLBACK_CHAR


class LanguageModel:
    def __init__(self, window_length, seed=None, random_source=None):
        """
        Символьная модель Маркова порядка window_length

        Args:
            window_length: длина окна (количество предыдущих символов)
            seed: зерно генератора случайных чисел; без него тексты не воспроизводятся
            random_source: готовый генератор (объект с методом random()), заменяет seed
        """
        if isinstance(window_length, bool) or not isinstance(window_length, int) or window_length <= 0:
            raise InvalidWindowLength(window_length)

        self.window_length = window_length
        self._random = random_source if random_source is not None else random.Random(seed)
        self._table = {}
        self._view = MappingProxyType(self._table)
        self.trained = False

    @property
    def table(self):
        """Отображение окно -> кортеж CharOccurrence (только для чтения)"""
        return self._view

    def train(self, stream):
        """
        Обучение модели на потоке символов

        Args:
            stream: строка, итерируемый объект символов или открытый текстовый файл

        Returns:
            LanguageModel: эта же модель
        """
        if self.trained:
            raise ModelAlreadyTrainedError("Модель уже обучена")

        start_time = time.time()

        # Сначала полностью собираем частоты, потом считаем вероятности
        frequencies = TextProcessor.count_window_frequencies(stream, self.window_length)
        for window, counts in frequencies.items():
            self._table[window] = self.calculate_probabilities(counts)
        self.trained = True

        logger.info(f"Обучение завершено: {len(self._table):,} окон длины {self.window_length}, "
                    f"время: {time.time() - start_time:.2f} сек")
        return self

    def train_from_file(self, file_path, normalize=False):
        """
        Обучение модели на текстовом файле

        Args:
            file_path: путь к текстовому файлу
            normalize: привести текст к нижнему регистру и схлопнуть пробелы

        Returns:
            LanguageModel: эта же модель
        """
        logger.info(f"Чтение файла {file_path}...")
        text = TextProcessor.read_text(file_path)
        logger.info(f"Размер текста: {len(text):,} символов")

        if normalize:
            text = TextProcessor.normalize_text(text)
            logger.info(f"После нормализации: {len(text):,} символов")

        return self.train(text)

    @staticmethod
    def calculate_probabilities(counts):
        """
        Расчет вероятностей (p и cp) для частот одного окна

        Args:
            counts: словарь символ -> количество в порядке первого появления

        Returns:
            tuple: CharOccurrence в том же порядке
        """
        total = sum(counts.values())
        occurrences = []
        cp = 0.0
        for character, count in counts.items():
            p = count / total
            cp += p
            occurrences.append(CharOccurrence(character, count, p, cp))
        return tuple(occurrences)

    def get_random_char(self, occurrences):
        return sample(occurrences, self._random)

    def generate(self, initial_text, length, random_source=None):
        """
        Генерация текста на основе обученной модели

        Если последние window_length символов initial_text не встречались
        при обучении, возвращается initial_text без изменений.

        Args:
            initial_text: начальный текст
            length: сколько символов дописать
            random_source: генератор только для этого вызова (по умолчанию - генератор модели)

        Returns:
            str: initial_text с дописанными символами
        """
        if length < 0:
            raise ValueError(f"Длина генерации не может быть отрицательной: {length}")

        if len(initial_text) < self.window_length:
            return initial_text
        window = initial_text[-self.window_length:]
        if window not in self._table:
            return initial_text

        rng = random_source if random_source is not None else self._random
        target_length = len(initial_text) + length
        generated = list(initial_text)

        while len(generated) < target_length:
            occurrences = self._table.get(window)
            if occurrences is None:
                logger.debug(f"Окно {window!r} не встречалось при обучении, генерация остановлена")
                break
            generated.append(sample(occurrences, rng))
            window = ''.join(generated[-self.window_length:])

        return ''.join(generated)

    def get_probabilities(self, window):
        """Вероятности следующего символа для окна, {} если окно неизвестно"""
        return {o.character: o.probability for o in self._table.get(window, ())}

    def stats(self):
        return {
            'window_length': self.window_length,
            'contexts': len(self._table),
            'transitions': sum(o.count for occurrences in self._table.values() for o in occurrences),
            'max_successors': max((len(occurrences) for occurrences in self._table.values()), default=0),
        }

    def __contains__(self, window):
        return window in self._table

    def __len__(self):
        return len(self._table)

    def __str__(self):
        lines = []
        for window, occurrences in self._table.items():
            lines.append(f"{window} : ({' '.join(str(o) for o in occurrences)})\n")
        return ''.join(lines)


def train(stream, window_length, seed=None, random_source=None):
    """Создание и обучение модели на потоке символов"""
    return LanguageModel(window_length, seed=seed, random_source=random_source).train(stream)


def generate(model, initial_text, length, random_source=None):
    return model.generate(initial_text, length, random_source=random_source)
