"""Locale expansion of admin fields.

One declared field becomes one field per configured locale, each bound to
that locale's translation record on the model. Index listings skip the
expansion and show the plain model attribute.
"""
