"""
Django settings for testing treeutil
"""

SECRET_KEY = '7r33u71l'

INSTALLED_APPS = [
    'treeutil',
]

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.i18n',
            ],
        },
    },
]

USE_TZ = True
