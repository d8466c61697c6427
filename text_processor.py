import re
import logging
from collections import defaultdict

from exceptions import InputTooShortError, InvalidWindowLength

logger = logging.getLogger(__name__)


class TextProcessor:
    # Кодировки, которые пробуются при чтении корпуса
    ENCODINGS = ('utf-8', 'cp1251', 'latin-1')

    @staticmethod
    def read_text(file_path):
        """Чтение файла с подбором кодировки"""
        for encoding in TextProcessor.ENCODINGS[:-1]:
            try:
                with open(file_path, 'r', encoding=encoding) as f:
                    return f.read()
            except UnicodeDecodeError:
                logger.info(f"Файл {file_path} не в кодировке {encoding}, пробуем следующую")

        # latin-1 декодирует любую последовательность байт
        with open(file_path, 'r', encoding=TextProcessor.ENCODINGS[-1]) as f:
            return f.read()

    @staticmethod
    def iter_chars(stream, chunk_size=65536):
        """
        Посимвольный обход потока

        Args:
            stream: строка, итерируемый объект символов или открытый текстовый файл
            chunk_size: размер блока при чтении из файла

        Yields:
            str: очередной символ
        """
        if hasattr(stream, 'read'):
            while True:
                chunk = stream.read(chunk_size)
                if not chunk:
                    return
                yield from chunk
        else:
            yield from stream

    @staticmethod
    def normalize_text(text):
        """Нормализация текста: нижний регистр и схлопывание пробельных символов"""
        text = text.lower()
        text = re.sub(r'\s+', ' ', text).strip()
        return text

    @staticmethod
    def count_overall_frequencies(text):
        """Подсчет общих частот символов"""
        frequencies = defaultdict(int)
        for char in TextProcessor.iter_chars(text):
            frequencies[char] += 1
        return dict(frequencies)

    @staticmethod
    def count_window_frequencies(stream, window_length):
        """
        Подсчет частот символов, следующих за каждым окном

        Порядок ключей и символов внутри окна - порядок первого появления.

        Args:
            stream: поток символов (см. iter_chars)
            window_length: длина окна

        Returns:
            dict: словарь, где ключ - окно (window_length символов),
                  значение - словарь частот следующих символов

        Raises:
            InputTooShortError: если в потоке меньше window_length символов
        """
        if isinstance(window_length, bool) or not isinstance(window_length, int) or window_length <= 0:
            raise InvalidWindowLength(window_length)

        chars = TextProcessor.iter_chars(stream)

        window = ''
        for char in chars:
            window += char
            if len(window) == window_length:
                break
        if len(window) < window_length:
            raise InputTooShortError(window_length, len(window))

        frequencies = defaultdict(lambda: defaultdict(int))
        for char in chars:
            frequencies[window][char] += 1
            window = window[1:] + char

        return {key: dict(successors) for key, successors in frequencies.items()}
