import threading

from codeproxy.cache import CacheStats, ToolSchemaCache
from codeproxy.claude import ClaudeTool, JsonSchema


def make_test_tool(name: str, description: str | None = None) -> ClaudeTool:
    return ClaudeTool(
        name=name,
        description=description if description is not None else f"Test tool {name}",
        input_schema=JsonSchema(
            schema_type="object",
            properties={"param": JsonSchema(schema_type="string")},
        ),
    )


def test_cache_miss_then_hit():
    cache = ToolSchemaCache()
    tool = make_test_tool("test_tool")

    assert len(cache) == 0
    result1 = cache.get_or_transform(tool)
    assert len(cache) == 1

    result2 = cache.get_or_transform(tool)
    assert len(cache) == 1

    assert result1.name == result2.name
    assert result1.description == result2.description
    assert result1 == result2


def test_transformed_declaration_carries_tool_fields():
    cache = ToolSchemaCache()
    tool = make_test_tool("echo")

    result = cache.get_or_transform(tool)

    assert result.name == "echo"
    assert result.description == "Test tool echo"
    assert result.parameters.schema_type == "object"
    assert result.parameters.properties["param"].schema_type == "string"


def test_hit_is_keyed_by_name():
    cache = ToolSchemaCache()
    cache.get_or_transform(make_test_tool("same", "First"))

    result = cache.get_or_transform(make_test_tool("same", "Second"))

    assert result.description == "First"
    assert len(cache) == 1


def test_returned_copy_does_not_alter_cache():
    cache = ToolSchemaCache()
    tool = make_test_tool("isolated")

    first = cache.get_or_transform(tool)
    first.parameters.schema_type = "changed"

    second = cache.get_or_transform(tool)
    assert second.parameters.schema_type == "object"


def test_multiple_tools():
    cache = ToolSchemaCache()

    cache.get_or_transform(make_test_tool("tool_1"))
    cache.get_or_transform(make_test_tool("tool_2"))
    cache.get_or_transform(make_test_tool("tool_3"))

    assert len(cache) == 3

    stats = cache.stats()
    assert stats.total_entries == 3
    assert "tool_1" in stats.tools
    assert "tool_2" in stats.tools
    assert "tool_3" in stats.tools


def test_stats_of_empty_cache():
    stats = ToolSchemaCache().stats()
    assert stats == CacheStats(total_entries=0, tools=[])


def test_clear():
    cache = ToolSchemaCache()

    cache.get_or_transform(make_test_tool("tool_1"))
    cache.get_or_transform(make_test_tool("tool_2"))

    assert len(cache) == 2

    cache.clear()

    assert len(cache) == 0
    assert cache.is_empty()


def test_thread_safety():
    cache = ToolSchemaCache()

    threads = [
        threading.Thread(target=cache.get_or_transform, args=(make_test_tool(f"tool_{i}"),))
        for i in range(10)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) <= 10
    assert sorted(cache.stats().tools) == sorted(f"tool_{i}" for i in range(10))


def test_concurrent_reads():
    cache = ToolSchemaCache()
    tool = make_test_tool("concurrent_test")
    cache.get_or_transform(tool)

    names: list[str] = []
    names_lock = threading.Lock()

    def read() -> None:
        result = cache.get_or_transform(tool)
        with names_lock:
            names.append(result.name)

    threads = [threading.Thread(target=read) for _ in range(100)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert names == ["concurrent_test"] * 100
    assert len(cache) == 1