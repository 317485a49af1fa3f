from __future__ import annotations

from codemap.extract import CSharpDeclarationExtractor, TypeDeclaration, split_parent_list

SPAWNER = """
using System.Collections.Generic;
using UnityEngine;

public class Spawner : MonoBehaviour, ISpawner<Enemy, Boss>
{
    [SerializeField] private float delay = 1.5f;
    public static readonly int MaxCount = 10;
    private List<GameObject> pool;
    public const string Tag = "enemy";
    public int Count => pool.Count;

    public override string ToString() { return Tag; }

    public async Task SpawnAsync(Vector3 position,
                                 int amount = 1)
    {
        for (int i = 0; i < amount; i++) { }
    }

    protected T Get<T>(string key) where T : class { return null; }

    void Update() { }
}
"""


def test_extracts_name_base_interfaces_fields_and_methods() -> None:
    extractor = CSharpDeclarationExtractor()

    declarations = extractor.extract_declarations(
        "class Foo : Base, IA, IB { public int x; public void Bar() {} }"
    )

    assert declarations == [
        TypeDeclaration(
            name="Foo",
            base_type="Base",
            interfaces=("IA", "IB"),
            fields=("int x",),
            methods=("void Bar()",),
            offset=0,
            body_closed=True,
        )
    ]


def test_modifiers_generics_and_multiline_parameters() -> None:
    extractor = CSharpDeclarationExtractor()

    (spawner,) = extractor.extract_declarations(SPAWNER)

    assert spawner.name == "Spawner"
    assert spawner.base_type == "MonoBehaviour"
    assert spawner.interfaces == ("ISpawner<Enemy, Boss>",)
    assert spawner.fields == (
        "float delay",
        "int MaxCount",
        "List<GameObject> pool",
        "string Tag",
    )
    assert spawner.methods == (
        "string ToString()",
        "Task SpawnAsync(Vector3 position, int amount = 1)",
        "T Get(string key)",
    )


def test_declaration_without_colon_has_no_inheritance() -> None:
    extractor = CSharpDeclarationExtractor()

    (plain,) = extractor.extract_declarations("public class Plain\n{\n}\n")

    assert plain.base_type is None
    assert plain.interfaces == ()
    assert plain.fields == ()
    assert plain.methods == ()


def test_generic_type_parameters_are_not_part_of_the_name() -> None:
    extractor = CSharpDeclarationExtractor()

    (pool,) = extractor.extract_declarations("class Pool<T> : Base { public T item; }")

    assert pool.name == "Pool"
    assert pool.base_type == "Base"
    assert pool.fields == ("T item",)


def test_identical_members_are_collapsed() -> None:
    extractor = CSharpDeclarationExtractor()
    source = "\n".join(
        [
            "class Dup {",
            "    public int x;",
            "    public int x;",
            "    public void Run() {}",
            "    public void Run() {}",
            "}",
        ]
    )

    (dup,) = extractor.extract_declarations(source)

    assert dup.fields == ("int x",)
    assert dup.methods == ("void Run()",)


def test_duplicate_type_name_in_one_file_keeps_first() -> None:
    extractor = CSharpDeclarationExtractor()
    source = "class Util { public int a; }\nclass Util { public int b; }\n"

    declarations = extractor.extract_declarations(source)

    assert [item.name for item in declarations] == ["Util"]
    assert declarations[0].fields == ("int a",)


def test_unclosed_declaration_keeps_empty_members_and_scanning_continues() -> None:
    extractor = CSharpDeclarationExtractor()
    source = "\n".join(
        [
            "class Broken : MonoBehaviour {",
            "    public int speed;",
            "class Later { public int y; }",
        ]
    )

    broken, later = extractor.extract_declarations(source)

    assert broken.name == "Broken"
    assert broken.base_type == "MonoBehaviour"
    assert broken.body_closed is False
    assert broken.fields == ()
    assert broken.methods == ()
    assert later.body_closed is True
    assert later.fields == ("int y",)


def test_comments_and_strings_are_ignored_when_masking() -> None:
    source = "\n".join(
        [
            "// class Ghost { public int hidden; }",
            "class Real {",
            "    /* public int commented; */",
            '    public string label = "public int fake;";',
            "}",
        ]
    )

    masked = CSharpDeclarationExtractor().extract_declarations(source)
    unmasked = CSharpDeclarationExtractor(mask_comments=False).extract_declarations(source)

    assert [item.name for item in masked] == ["Real"]
    assert masked[0].fields == ("string label",)
    assert [item.name for item in unmasked] == ["Ghost", "Real"]
    assert "int fake" in unmasked[1].fields


def test_type_keywords_are_configurable() -> None:
    source = "struct Point { public int x; }\nclass Shape { }"

    default = CSharpDeclarationExtractor().extract_declarations(source)
    classes_only = CSharpDeclarationExtractor(type_keywords=("class",)).extract_declarations(
        source
    )

    assert [item.name for item in default] == ["Point", "Shape"]
    assert [item.name for item in classes_only] == ["Shape"]


def test_scan_type_offsets_lists_every_occurrence() -> None:
    source = "class Util { }\nclass Util { }\nforeach (var record in records) { }"

    offsets = CSharpDeclarationExtractor().scan_type_offsets(source)

    assert offsets == [("Util", 0), ("Util", 15)]


def test_scan_members_orders_fields_and_methods_by_offset() -> None:
    source = "class A { public void Go() {} public int n; }"

    members = CSharpDeclarationExtractor().scan_members(source)

    assert [(item.kind, item.descriptor) for item in members] == [
        ("method", "void Go()"),
        ("field", "int n"),
    ]


def test_split_parent_list_respects_generic_brackets() -> None:
    assert split_parent_list(" Base , IMap<string, List<int>>, IB ") == [
        "Base",
        "IMap<string, List<int>>",
        "IB",
    ]


def test_supports_only_cs_paths() -> None:
    extractor = CSharpDeclarationExtractor()

    assert extractor.supports_path("Assets/Scripts/Player.cs")
    assert extractor.supports_path("Assets/Scripts/Player.CS")
    assert not extractor.supports_path("Assets/Scripts/Player.js")


def test_generic_constraints_do_not_hide_the_declaration() -> None:
    extractor = CSharpDeclarationExtractor()
    source = "\n".join(
        [
            "public class Repo<T> : Base, IRepo<T> where T : class, new()",
            "{",
            "    public int x;",
            "}",
            "class Cache<K> where K : struct { public K key; }",
        ]
    )

    repo, cache = extractor.extract_declarations(source)

    assert repo.name == "Repo"
    assert repo.base_type == "Base"
    assert repo.interfaces == ("IRepo<T>",)
    assert repo.fields == ("int x",)
    assert cache.name == "Cache"
    assert cache.base_type is None
    assert cache.fields == ("K key",)
