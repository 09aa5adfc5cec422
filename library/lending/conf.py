from django.conf import settings

DEFAULTS = {
    'LOAN_PERIOD_DAYS': 14,
    'DUE_DATE_FORMAT': '%b %d, %Y',
}


def lending_setting(name):
    return getattr(settings, 'LENDING', {}).get(name, DEFAULTS[name])
