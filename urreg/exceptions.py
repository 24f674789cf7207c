#
# (c) Copyright 2021 by Coinkite Inc. This file is covered by license found in COPYING-CC.
#
# Exceptions
#

class RegistryError(RuntimeError):
    def __init__(self, msg, field=None):
        self.field = field
        super().__init__(msg)

class MissingRequiredField(RegistryError):
    # required key absent from a decoded map
    def __init__(self, type_name, field):
        self.type_name = type_name
        super().__init__(f'{type_name}: missing required field "{field}"', field)

class MalformedField(RegistryError):
    # value present but wrong length, wrong node kind, or wrong tag
    def __init__(self, type_name, field, problem):
        self.type_name = type_name
        self.problem = problem
        super().__init__(f'{type_name}: field "{field}" {problem}', field)

class DuplicateTagRegistration(RegistryError):
    def __init__(self, tag, existing, proposed):
        self.tag = tag
        super().__init__(f'tag {tag} already registered to "{existing}", not "{proposed}"')

class CatalogClosed(RegistryError):
    pass

class UnknownRegistryType(RegistryError, KeyError):
    def __str__(self):
        # KeyError would quote the message otherwise
        return self.args[0]

# EOF
