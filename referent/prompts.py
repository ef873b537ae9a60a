"""
Prompt templates for AI transformations.

Each action kind maps to a static template (system instruction, user
instruction, temperature). Adding a transformation means adding an
ActionKind member and a PROMPT_TEMPLATES entry.
"""

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidInput
from .extractor import ArticleDocument


class ActionKind(str, Enum):
    SUMMARY = 'summary'
    THESES = 'theses'
    TELEGRAM = 'telegram'

    @classmethod
    def parse(cls, value) -> 'ActionKind':
        """Coerce a request value into an ActionKind or reject it."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            choices = ', '.join(kind.value for kind in cls)
            raise InvalidInput(f'actionKind must be one of: {choices}')


@dataclass(frozen=True)
class PromptTemplate:
    system_instruction: str
    user_template: str  # str.format fields: {article}, {url}
    temperature: float


@dataclass(frozen=True)
class PromptSpec:
    system_instruction: str
    user_instruction: str
    temperature: float


PROMPT_TEMPLATES = {
    ActionKind.SUMMARY: PromptTemplate(
        system_instruction=(
            'Ты опытный журналист и редактор, специализирующийся на создании кратких и информативных '
            'резюме статей. Твоя задача - выделить суть материала, сохранив все важные детали и контекст. '
            'Пиши на русском языке, используй ясный и понятный стиль.'
        ),
        user_template="""Прочитай следующую статью и создай краткое описание на русском языке.

Требования:
- Объем: 2-3 абзаца
- Опиши основную тему и цель статьи
- Выдели ключевые моменты и аргументы
- Включи основные выводы или заключения
- Сохрани важный контекст и факты
- Пиши связным текстом, не используй списки

Статья:
{article}""",
        temperature=0.5,
    ),
    ActionKind.THESES: PromptTemplate(
        system_instruction=(
            'Ты профессиональный аналитик и исследователь, который умеет структурировать информацию '
            'и выделять ключевые идеи из текстов. Твоя задача - создать четкий и логичный список '
            'основных тезисов. Пиши на русском языке.'
        ),
        user_template="""Выдели основные тезисы из следующей статьи и представь их в виде маркированного списка на русском языке.

Требования:
- Используй символ "•" для маркировки каждого тезиса
- Каждый тезис должен быть кратким (1-2 предложения), но информативным
- Тезисы должны отражать основные идеи, аргументы и выводы статьи
- Расположи тезисы в логическом порядке
- Не дублируй информацию между тезисами
- Минимум 3 тезиса, максимум 10

Статья:
{article}""",
        temperature=0.3,
    ),
    ActionKind.TELEGRAM: PromptTemplate(
        system_instruction=(
            'Ты профессиональный SMM-специалист и копирайтер, создающий вирусные и привлекательные '
            'посты для Telegram каналов. Ты умеешь балансировать между информативностью и '
            'развлекательностью, используя эмодзи, хештеги и правильное форматирование. '
            'Пиши на русском языке.'
        ),
        user_template="""Создай пост для Telegram канала на русском языке на основе следующей статьи.

Требования:
- Используй эмодзи для привлечения внимания (но не переборщи)
- Начни с цепляющего заголовка или вступления
- Структурируй текст короткими абзацами
- Добавь релевантные хештеги в конце (3-5 штук)
- Пост должен быть информативным, но легко читаемым
- Используй разделители (---) для структуры, если нужно
- Длина: оптимально для Telegram (не слишком длинно)
- Сохрани ключевую информацию из статьи
- В самом конце поста обязательно добавь ссылку на источник в формате: "Источник: [название статьи]({url})" или "🔗 Источник: {url}"

Статья:
{article}

URL источника: {url}""",
        temperature=0.7,
    ),
}

TRANSLATION_TEMPLATE = PromptTemplate(
    system_instruction=(
        'Ты профессиональный переводчик. Переведи следующий текст с английского на русский язык, '
        'сохраняя структуру и форматирование. Переведи только текст, не добавляй комментарии.'
    ),
    user_template='Переведи на русский язык:\n\n{article}',
    temperature=0.3,
)


def format_article(title: str, content: str) -> str:
    return f'Заголовок: {title}\n\n{content}'


def render_prompt(template: PromptTemplate, document: ArticleDocument, url: str) -> PromptSpec:
    """
    Fill a template with article text.

    Values are substituted in a single pass, so braces inside the article
    or URL are never re-interpreted as fields.
    """
    return PromptSpec(
        system_instruction=template.system_instruction,
        user_instruction=template.user_template.format(
            article=format_article(document.title, document.content),
            url=url,
        ),
        temperature=template.temperature,
    )


def build_prompt(action_kind: ActionKind, document: ArticleDocument, url: str) -> PromptSpec:
    """Build the prompt pair for an action kind."""
    return render_prompt(PROMPT_TEMPLATES[ActionKind.parse(action_kind)], document, url)


def build_translation_prompt(document: ArticleDocument, url: str) -> PromptSpec:
    return render_prompt(TRANSLATION_TEMPLATE, document, url)
