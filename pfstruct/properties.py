import logging


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    while not condition(instance):
        instance = instance.father

    return instance


class Dependency:
    '''Relation between fields resolved at unpacking time.

    It allows to write something like

        class Names(Chunk):
            count = fields.StructField('I')
            names = fields.ArrayField(fields.StructField('I'), n=Dependency('.count'))

    and have the number of elements of the array read from the field named
    'count' of the same chunk.

    The expression is a dotted path: a leading '.' means the path starts at
    the father of the field, otherwise it starts from the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        fields_path = self.expression.split('.')
        # '.count'.split(".") -> ['', 'count']
        # 'count'.split(".") -> ['count']

        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f"cannot resolve '{self.expression}' for a field without father")

        for component_name in fields_path:
            field = getattr(field, component_name)

        self.logger.debug(' resolved \'%s\' as field %s' % (self.expression, field.__class__.__name__))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value

