from unittest.mock import MagicMock

from route_swagger.config import GeneratorConfig
from route_swagger.generator.models import ModelRegistry, ModelResolver
from route_swagger.generator.paths import PathAssembler
from route_swagger.parser.base import ModelSchema, NormalizedRoute, StaticRuleSource


def _route(uri, method="get", comment="", handler="app.http.C@m", rules=None, original_uri=None):
    return NormalizedRoute(
        uri=uri,
        original_uri=original_uri or uri,
        method=method,
        handler=handler,
        comment=comment,
        rule_source=StaticRuleSource(rules) if rules is not None else None,
    )


def _assembler(**config) -> PathAssembler:
    return PathAssembler(GeneratorConfig(**config), ModelResolver(ModelRegistry()))


def _assemble(route, **config) -> dict:
    doc = {"paths": {}}
    _assembler(**config).assemble(route, doc)
    return doc


class TestResponses:
    def test_tag_response_wins_over_base(self):
        doc = _assemble(_route("/users", comment="List\n@response 200 custom"))
        assert doc["paths"]["/users"]["get"]["responses"]["200"] == {"description": "custom"}

    def test_base_fills_gap(self):
        doc = _assemble(_route("/users", comment="List\n@response 404 Missing"))
        assert doc["paths"]["/users"]["get"]["responses"] == {
            "404": {"description": "Missing"},
            "200": {"description": "OK"},
        }

    def test_post_receives_modified_responses(self):
        item = _assemble(_route("/users", method="post"))["paths"]["/users"]["post"]
        assert item["responses"] == {"200": {"description": "OK"}, "201": {"description": "OK"}}

    def test_delete_receives_modified_responses(self):
        item = _assemble(_route("/users/{user}", method="delete"))["paths"]["/users/{user}"]["delete"]
        assert "201" in item["responses"]

    def test_get_never_receives_modified_responses(self):
        item = _assemble(_route("/users"))["paths"]["/users"]["get"]
        assert item["responses"] == {"200": {"description": "OK"}}

    def test_first_tag_with_same_code_wins(self):
        comment = "List\n@response 200 first\n@response 200 second"
        item = _assemble(_route("/users", comment=comment))["paths"]["/users"]["get"]
        assert item["responses"]["200"] == {"description": "first"}


class TestPathItem:
    def test_metadata_fields(self):
        comment = "Show a user.\n\nDetails here.\n\n@deprecated"
        item = _assemble(_route("/users/{user}", comment=comment))["paths"]["/users/{user}"]["get"]
        assert item["summary"] == "Show a user."
        assert item["description"] == "Details here."
        assert item["deprecated"] is True
        assert item["tags"] == ["User"]

    def test_parse_disabled_ignores_comment(self):
        route = _route("/users", comment="Show\n@deprecated\n@response 404 Missing")
        item = _assemble(route, parseDocBlock=False)["paths"]["/users"]["get"]
        assert item["summary"] == ""
        assert item["description"] == ""
        assert item["deprecated"] is False
        assert item["responses"] == {"200": {"description": "OK"}}

    def test_no_parameters_key_when_empty(self):
        item = _assemble(_route("/users"))["paths"]["/users"]["get"]
        assert "parameters" not in item

    def test_query_parameters_for_get(self):
        route = _route("/users/{user}", rules={"fields": "string"})
        params = _assemble(route)["paths"]["/users/{user}"]["get"]["parameters"]
        assert [(p["in"], p["name"]) for p in params] == [("path", "user"), ("query", "fields")]

    def test_body_parameter_for_put(self):
        route = _route("/users/{user}", method="put", rules={"name": "required|string"})
        params = _assemble(route)["paths"]["/users/{user}"]["put"]["parameters"]
        assert params[0]["in"] == "path"
        assert params[1]["in"] == "body"
        assert params[1]["schema"]["required"] == ["name"]

    def test_query_parameters_for_delete(self):
        route = _route("/users/{user}", method="delete", rules={"force": "boolean"})
        params = _assemble(route)["paths"]["/users/{user}"]["delete"]["parameters"]
        assert params[1] == {"in": "query", "name": "force", "type": "boolean",
                             "required": False, "description": ""}

    def test_handler_without_reference_has_no_rules_or_comment(self):
        route = _route("/health", comment="Health", handler=None, rules={"verbose": "boolean"})
        item = _assemble(route)["paths"]["/health"]["get"]
        assert item["summary"] == ""
        assert "parameters" not in item

    def test_path_parameters_come_from_original_uri(self):
        route = _route("/posts/{post}", original_uri="/posts/{post?}")
        params = _assemble(route)["paths"]["/posts/{post}"]["get"]["parameters"]
        assert params[0]["required"] is False

    def test_rule_source_without_rules_method(self):
        route = _route("/users", rules={})
        route.rule_source = object()
        item = _assemble(route)["paths"]["/users"]["get"]
        assert "parameters" not in item

    def test_failing_rule_source_keeps_path_item(self):
        route = _route("/users/{user}", method="put")
        route.rule_source = MagicMock()
        route.rule_source.rules.side_effect = TypeError("rules() missing 1 required positional argument")
        item = _assemble(route)["paths"]["/users/{user}"]["put"]
        assert [p["in"] for p in item["parameters"]] == ["path"]
        assert "201" in item["responses"]

    def test_methods_share_uri_entry(self):
        doc = {"paths": {}}
        assembler = _assembler()
        assembler.assemble(_route("/users"), doc)
        assembler.assemble(_route("/users", method="post"), doc)
        assert list(doc["paths"]["/users"]) == ["get", "post"]


class TestResourceName:
    def test_first_placeholder(self):
        assembler = _assembler()
        assert assembler.resource_name("/users/{user}") == "User"
        assert assembler.resource_name("/posts/{post}/comments/{comment}") == "Post"
        assert assembler.resource_name("/users/{postId}") == "PostId"

    def test_generic_without_guessing(self):
        assert _assembler().resource_name("/users") == "Generic"

    def test_guess_from_first_segment(self):
        assert _assembler(guess_tag=True).resource_name("/users") == "User"

    def test_guess_strips_route_filter(self):
        assembler = _assembler(guess_tag=True, routeFilter="/api")
        assert assembler.resource_name("/api/categories") == "Category"

    def test_guess_without_segment(self):
        assert _assembler(guess_tag=True).resource_name("/") == "Generic"


class TestModels:
    def test_definition_written_for_declared_model(self):
        registry = ModelRegistry()
        registry.register("app.models.User", "@property string $name")
        assembler = PathAssembler(GeneratorConfig(), ModelResolver(registry, namespace="app.models."))
        doc = {"paths": {}}
        assembler.assemble(_route("/users/{user}"), doc)
        assert doc["definitions"] == {
            "User": {"title": "User", "description": "User model",
                     "properties": {"name": {"type": "string"}}},
        }

    def test_no_definitions_without_model(self):
        doc = _assemble(_route("/users/{user}"))
        assert "definitions" not in doc

    def test_model_resolved_once_per_run(self):
        resolver = MagicMock()
        resolver.resolve.return_value = ModelSchema(title="User", description="User model")
        assembler = PathAssembler(GeneratorConfig(), resolver)
        doc = {"paths": {}}
        assembler.assemble(_route("/users/{user}"), doc)
        assembler.assemble(_route("/users/{user}", method="delete"), doc)
        resolver.resolve.assert_called_once_with("User")
        assert doc["definitions"]["User"] == {"title": "User", "description": "User model"}
