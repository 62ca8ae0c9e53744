"""Logging configuration.

Every module logs through ``logging.getLogger(__name__)``; records
propagate to the console handler on the root logger.
"""

from filebox.settings.components import config

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'console': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'console',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'filebox': {
            'level': config('FILEBOX_LOG_LEVEL', default='INFO'),
        },
        'django': {
            'level': 'INFO',
        },
        'django.security': {
            'level': 'WARNING',
        },
    },
}
