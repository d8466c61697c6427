class MarkovError(Exception):
    """Базовое исключение модели Маркова"""


class InvalidWindowLength(MarkovError, ValueError):
    """Длина окна должна быть положительным целым числом"""

    def __init__(self, window_length):
        self.window_length = window_length
        super().__init__(f"Длина окна должна быть положительным целым числом, получено: {window_length!r}")


class InputTooShortError(MarkovError, ValueError):
    """Обучающий текст короче длины окна"""

    def __init__(self, window_length, received):
        self.window_length = window_length
        self.received = received
        super().__init__(
            f"Текст слишком короткий: нужно минимум {window_length} символов, получено {received}"
        )


class ModelAlreadyTrainedError(MarkovError, RuntimeError):
    """Повторное обучение уже обученной модели"""


class ConfigError(MarkovError, ValueError):
    """Некорректное значение переменной окружения"""
