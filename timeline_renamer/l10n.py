"""
Transcript strings in English and Russian.
"""
import locale
import os
from typing import Optional

RENAMED = 'renamed'
SKIPPED = 'skipped'
DELETED = 'deleted'
SCANNED_DIR = 'directory'
MISSING_DATE = 'missingDate'
UNSUPPORTED_EXT = 'unsupported'
ALREADY_RENAMED = 'alreadyRenamed'
SUFFIX_EXHAUSTED = 'suffixExhausted'
ERROR_RENAMING = 'errorRenaming'
ERROR_DELETE = 'errorDelete'
ERROR_RD_DIR = 'errorRdFolder'
OPERATION_TIME = 'operationTime'
FATAL_ERROR = 'fatalError'

TRANSLATIONS = {
    RENAMED: {'ru': 'Переименовано', 'en': 'Renamed'},
    SKIPPED: {'ru': 'Пропущено', 'en': 'Skipped'},
    DELETED: {'ru': 'Удалено', 'en': 'Deleted'},
    SCANNED_DIR: {'ru': 'Сканируемая папка', 'en': 'Scanned Directory'},
    MISSING_DATE: {'ru': 'Не удалось извлечь дату', 'en': 'Failed to extract date'},
    UNSUPPORTED_EXT: {
        'ru': 'Пропущен файл с неподдерживаемым расширением',
        'en': 'Skipped file with unsupported extension',
    },
    ALREADY_RENAMED: {'ru': 'Файл уже переименован', 'en': 'File already renamed'},
    SUFFIX_EXHAUSTED: {'ru': 'Не найдено свободное имя', 'en': 'No free file name left'},
    ERROR_RENAMING: {'ru': 'Ошибка при переименовании', 'en': 'Error renaming'},
    ERROR_DELETE: {'ru': 'Ошибка удаления', 'en': 'Error deleting'},
    ERROR_RD_DIR: {'ru': 'Ошибка при чтении папки', 'en': 'Failed to read the folder'},
    OPERATION_TIME: {'ru': 'Время выполнения', 'en': 'Execution time'},
    FATAL_ERROR: {'ru': 'Работа прервана из-за ошибки', 'en': 'Run aborted by an error'},
}

LANGUAGES = ('en', 'ru')


def detect_language() -> str:
    """Russian locales get 'ru', everything else 'en'."""
    lang = None
    try:
        lang = locale.getlocale()[0]
    except ValueError:
        pass
    lang = lang or os.environ.get('LC_ALL') or os.environ.get('LANG') or 'en'
    return 'ru' if lang.lower().startswith('ru') else 'en'


class Messages:
    def __init__(self, language: Optional[str] = None):
        self.language = language or detect_language()

    def get(self, key: str) -> str:
        return TRANSLATIONS.get(key, {}).get(self.language) or key
