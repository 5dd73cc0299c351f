# Copy to local_settings.py next to settings.py; it is imported last and
# overrides anything defined there.

SECRET_KEY = ''

DEBUG = True

ALLOWED_HOSTS = ['*']

# Mobile client runs on a device / emulator with changing origins
CORS_ALLOW_ALL_ORIGINS = True

# Calendar date used to decide which promotions are active
TIME_ZONE = 'Europe/Paris'

# For production use PostgreSQL:
# DATABASES = {
#     'default': {
#         'ENGINE': 'django.db.backends.postgresql',
#         'NAME': 'perfumes',
#         'USER': '',
#         'PASSWORD': '',
#         'HOST': 'localhost',
#         'PORT': '5432',
#     },
# }
