"""Business logic services.

Services contain the upstream client and the catalog views; routes only
call into them.
"""
