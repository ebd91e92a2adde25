"""KNoT thing command service.

Translates client commands (schema updates, data requests, data updates,
unregister) into validated operations against the things registry and
notifications to the client and connector message channels.

Packages:
    api/    - Things service HTTP client, exceptions, error sanitization
    thing/  - Clean Architecture implementation of the thing commands
"""

__version__ = "0.1.0"
