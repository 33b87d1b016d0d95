# Services package.
#
#   product_service: CRUD + pagination for Product
#
# Service functions accept an AsyncSession as their first argument so
# that the router layer controls the transaction boundary via the
# ``get_db`` dependency.
