from rest_framework.parsers import JSONParser

from .casing import snake_case_keys


class CanonicalJSONParser(JSONParser):
    """JSON parser that normalizes request bodies to the snake_case schema."""

    def parse(self, stream, media_type=None, parser_context=None):
        data = super().parse(stream, media_type=media_type, parser_context=parser_context)
        return snake_case_keys(data)
