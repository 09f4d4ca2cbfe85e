from pvschema import Schema, ValidationResult


class TestValidationResult:
    def test_groups_and_counts_errors(self):
        schema = Schema({"name": {"required": True}, "tags": [{"type": "string", "length": {"max": 3}}]})
        result = schema.analyze({"tags": [1, "abcd", "ok", 2]})
        assert isinstance(result, ValidationResult)
        assert not result.is_valid
        assert result.num_errors_total == len(result) == 4
        assert result.failed_paths == ["name", "tags.0", "tags.1", "tags.3"]
        assert result.num_errors_per_validator == {"length": 1, "required": 1, "type": 2}
        assert [error.validator for error in result.errors_per_path["tags.0"]] == ["type"]
        assert result.messages()[0] == "name is required."

    def test_valid_result(self):
        result = Schema({"name": "string"}).analyze({"name": "x"})
        assert result.is_valid
        assert not list(result)
        assert not result.errors_per_path
        assert not result.num_errors_per_validator
