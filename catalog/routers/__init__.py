# Routers package.
#
#   products: authenticated CRUD under settings.API_PREFIX
#   console: unauthenticated diagnostics under settings.CONSOLE_PATH
