"""
Domain layer - View models and domain errors.

This layer contains the gift, alert and social view models and the
exception taxonomy, independent of the record store in use.
"""
