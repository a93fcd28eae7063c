import logging
from typing import List


logger = logging.getLogger(__name__)


class Dependency:
    '''This makes the relation between fields possible.

    The relation is defined in one direction (usually for unpacking) and
    must be reversed when a value is assigned!

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('I')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length'.

    The syntax for defining the expression is inspired from module resolution:
    the leading '.' indicates we refer to a field at the same level, the following
    components walk down into sub-chunks.
    '''
    def __init__(self, expression):
        if not expression.startswith('.') or expression == '.':
            raise ValueError(f'\'{expression}\' is not a valid dependency: it must be like \'.field\'')

        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        logger.debug('trying to resolve \'%s\' for field \'%s\'' % (self.expression, instance.name))

        # '.length'.split(".") -> ['', 'length']
        # '.header.count'.split(".") -> ['', 'header', 'count']
        fields_path: List[str] = self.expression.split('.')[1:]

        field = instance.father

        if field is None:
            raise AttributeError(f'field \'{instance.name}\' has no father to resolve \'{self.expression}\' against')

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value
        logger.debug(' resolved with value %s' % value)

        return value

    def resolve_and_set(self, instance, value):
        real_field = self.resolve_field(instance)
        if not hasattr(real_field, 'value'):
            raise ValueError('something is wrong with the Dependency resolution!')

        real_field.value = value
