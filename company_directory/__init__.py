"""
Company directory: locations, services and the workers attached to them.

The HTTP application lives in ``company_directory.app``.
"""
