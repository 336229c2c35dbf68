"""
Display helpers shared by the dashboard, prospect and task listings

All functions are pure and never raise for empty or missing input,
so templates can call them on any row.
"""

from datetime import date, datetime, time

from django.contrib.humanize.templatetags.humanize import naturaltime
from django.utils import timezone, translation
from django.utils.dateparse import parse_datetime


# Empty texts differ by call site
NO_INTERACTIONS_TEXT = 'No ha habido interacciones'
NO_INTERACTIONS_DASHBOARD_TEXT = 'No hay interacciones'

# Avatar palette (CSS classes); picked by the first character of the initials
AVATAR_COLORS = [
    'bg-blue-500',
    'bg-green-500',
    'bg-orange-500',
    'bg-red-500',
    'bg-purple-500',
    'bg-indigo-500',
    'bg-cyan-500',
    'bg-pink-500',
]

CTA_VISIT_TEXT = 'Programar visita para...'
CTA_NONE_TEXT = 'No se detectó...'
CTA_SCORE_THRESHOLD = 50


def get_initials(name):
    """
    Returns first letters for avatar: 'Ana García' → 'AG'

    Only the first two tokens count; an empty name gives ''.
    """
    if not name:
        return ''
    return ''.join(token[0] for token in name.split()).upper()[:2]


def get_avatar_color(initials):
    char_code = ord(initials[0]) if initials else 0
    return AVATAR_COLORS[char_code % len(AVATAR_COLORS)]


def _as_aware_datetime(value):
    if isinstance(value, str):
        value = parse_datetime(value)
        if value is None:
            return None
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)

    if timezone.is_naive(value):
        value = timezone.make_aware(value)
    return value


def days_between(value, now=None):
    """Whole days elapsed from value to now (truncated toward zero)."""
    now = now or timezone.now()
    return int((now - value).total_seconds() / 86400)


def relative_date_text(value, empty_text=NO_INTERACTIONS_TEXT, now=None):
    """
    Human text for the last interaction date

    Rules:
        0 days      → 'Hoy'
        1 day       → 'Hace 1 día'
        2 - 7 days  → 'Hace N días'
        otherwise   → Spanish distance ('hace 2 semanas')
        missing     → empty_text
    """
    if not value:
        return empty_text

    value = _as_aware_datetime(value)
    if value is None:
        return empty_text

    days = days_between(value, now=now)

    if days == 0:
        return 'Hoy'
    if days == 1:
        return 'Hace 1 día'
    if 1 < days <= 7:
        return f'Hace {days} días'

    with translation.override('es'):
        return str(naturaltime(value))


def score_color(score):
    """Text color for a score in the prospect table."""
    score = score or 0
    if score >= 70:
        return 'text-green-600'
    if score >= 40:
        return 'text-orange-600'
    return 'text-red-600'


def score_badge(score):
    """Badge classes for urgency on the dashboard Kanban."""
    score = score or 0
    if score >= 70:
        return 'bg-red-100 text-red-800'
    if score >= 40:
        return 'bg-yellow-100 text-yellow-800'
    return 'bg-gray-100 text-gray-800'


def impact_badge(impact):
    impact = impact or 0
    if impact >= 70:
        return 'bg-green-100 text-green-800'
    if impact >= 40:
        return 'bg-yellow-100 text-yellow-800'
    return 'bg-gray-100 text-gray-800'


def cta_text(score):
    """Suggested next action shown in the prospect table."""
    if (score or 0) > CTA_SCORE_THRESHOLD:
        return CTA_VISIT_TEXT
    return CTA_NONE_TEXT


def due_date_status(due_date, today=None):
    """
    Time left until a task is due

    Returns:
        dict: {'text': 'Tarea vencida' | 'Hoy' | '1 día' | 'N días', 'color': css class}
    """
    if not due_date:
        return {'text': '', 'color': 'text-slate-600'}

    if isinstance(due_date, datetime):
        due_date = timezone.localtime(due_date).date() if timezone.is_aware(due_date) else due_date.date()

    today = today or timezone.localdate()
    diff_days = (due_date - today).days

    if diff_days < 0:
        return {'text': 'Tarea vencida', 'color': 'text-red-500'}
    if diff_days == 0:
        return {'text': 'Hoy', 'color': 'text-amber-500'}
    if diff_days == 1:
        return {'text': '1 día', 'color': 'text-slate-600'}
    return {'text': f'{diff_days} días', 'color': 'text-slate-600'}
