import gc
from functools import partial

from pvschema.utils import signature
from pvschema.utils.signature import accepts_keyword


class TestAcceptsKeyword:
    def test_declared_parameter(self):
        def check(value, context, path):
            return True

        assert accepts_keyword(check, "path")
        assert not accepts_keyword(lambda value, context: True, "path")

    def test_var_keyword(self):
        assert accepts_keyword(lambda value, context, **kwargs: True, "path")

    def test_partial_and_builtins(self):
        assert not accepts_keyword(partial(lambda value, context, arg: True, arg=1), "path")
        assert not accepts_keyword(len, "path")

    def test_cache_does_not_keep_functions_alive(self):
        def make_validator():
            return lambda value, context, path: True

        gc.collect()
        cached_before = len(signature._keyword_cache)
        validators = [make_validator() for _ in range(10)]
        for validator in validators:
            assert accepts_keyword(validator, "path")
        assert len(signature._keyword_cache) == cached_before + 10
        del validators, validator
        gc.collect()
        assert len(signature._keyword_cache) <= cached_before
