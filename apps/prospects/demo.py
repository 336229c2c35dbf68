"""
Demo prospects shown instead of a blank table

Used when the user has no profile, the query fails or the organization
has no prospects yet. Dates are relative to "now" so the relative-date
texts stay meaningful.
"""

from datetime import timedelta

from django.utils import timezone


DEMO_PROSPECTS = [
    {
        'id': '1',
        'name': 'Ertha Matiebe',
        'email': 'ematiebe1@ihg.com',
        'phone': '+86 179 324 7426',
        'location': 'Liaocheng, China',
        'score': 19.06,
        'substatus': 'Primer contacto',
        'last_interaction_days_ago': 10,
        'interaction_count': 1,
    },
    {
        'id': '2',
        'name': 'Adolfo Herrero',
        'email': 'adolfoherrero@gmail.com',
        'phone': '674 38 32 47',
        'location': 'Madrid, España',
        'score': 16.18,
        'substatus': 'Primer contacto',
        'interaction_count': 2,
    },
    {'id': '3', 'name': 'carolina --', 'email': 'miaticomalaga@yahoo.es', 'phone': '644568886'},
    {'id': '4', 'name': 'Nadine Clementine...', 'email': 'info@lifecoachnadine.be', 'phone': '645710673'},
    {'id': '5', 'name': 'William Cavin', 'email': 'wjcavin@yahoo.com', 'phone': '795107647'},
    {'id': '6', 'name': 'Andreea Marculescu', 'email': 'email@example.com', 'phone': ''},
    {'id': '7', 'name': 'Paola Emilia Gugliotta', 'email': 'paoguglis@gmail.com', 'phone': '667726710'},
    {'id': '8', 'name': 'Artem Rudnevskii', 'email': 'email@example.com', 'phone': ''},
    {'id': '9', 'name': 'Audrey Curran', 'email': 'email@example.com', 'phone': ''},
    {'id': '10', 'name': 'Robert Haik', 'email': 'robert@haikfamily.com', 'phone': '7862828630'},
]


def demo_prospect_rows(now=None):
    """
    Raw demo rows in the same shape as the live query

    Returns:
        list[dict]: 10 rows, all in 'Fase inicial' / 'Primer contacto'
    """
    now = now or timezone.now()
    rows = []
    for demo in DEMO_PROSPECTS:
        days_ago = demo.get('last_interaction_days_ago')
        rows.append({
            'id': demo['id'],
            'name': demo['name'],
            'email': demo['email'],
            'phone': demo['phone'],
            'location': demo.get('location', '-'),
            'score': demo.get('score', 0),
            'status': 'Fase inicial',
            'substatus': demo.get('substatus', 'Primer contacto'),
            'last_interaction_date': now - timedelta(days=days_ago) if days_ago else None,
            'interaction_count': demo.get('interaction_count', 0),
        })
    return rows
