import pytest

from inmemfs import IMFSDirectoryNotEmptyError, IMFSNotFoundError, tokenize
from tests.helpers.asserts import assert_tree_consistent


def T(path):
    return tokenize(path)


def test_remove_file(namespace_tree):
    namespace_tree.create_file(T("/f.bin"), b"data")
    namespace_tree.remove(T("/f.bin"))
    with pytest.raises(IMFSNotFoundError):
        namespace_tree.get(T("/f.bin"))


def test_remove_empty_directory_non_recursive(namespace_tree):
    namespace_tree.create(T("/d"))
    namespace_tree.remove(T("/d"), recursive=False)
    assert namespace_tree.list(()) == ()


def test_remove_non_empty_directory_requires_recursive(namespace_tree):
    namespace_tree.create(T("/a"))
    namespace_tree.create_file(T("/a/f.txt"), b"x")
    with pytest.raises(IMFSDirectoryNotEmptyError) as excinfo:
        namespace_tree.remove(T("/a"), recursive=False)
    assert excinfo.value.filename == "/a"
    assert namespace_tree.read(T("/a/f.txt")) == b"x"

    namespace_tree.remove(T("/a"), recursive=True)
    with pytest.raises(IMFSNotFoundError):
        namespace_tree.get(T("/a"))
    assert_tree_consistent(namespace_tree)


def test_remove_recursive_drops_whole_subtree(namespace_tree):
    namespace_tree.create_file(T("/a/b/c/deep.txt"), b"x")
    namespace_tree.create(T("/a/b/other"))
    namespace_tree.create(T("/keep"))
    namespace_tree.remove(T("/a/b"), recursive=True)
    assert [e.name for e in namespace_tree.list(T("/a"))] == []
    assert [e.name for e in namespace_tree.list(())] == ["a", "keep"]
    assert namespace_tree.stats()["file_count"] == 0


def test_remove_recursive_on_file(namespace_tree):
    namespace_tree.create_file(T("/f"), b"x")
    namespace_tree.remove(T("/f"), recursive=True)
    with pytest.raises(IMFSNotFoundError):
        namespace_tree.get(T("/f"))


def test_remove_nonexistent_raises(namespace_tree):
    with pytest.raises(IMFSNotFoundError):
        namespace_tree.remove(T("/nope"))


def test_remove_root_raises(namespace_tree):
    namespace_tree.create(T("/d"))
    with pytest.raises(IMFSNotFoundError, match="root"):
        namespace_tree.remove((), recursive=True)
    assert [e.name for e in namespace_tree.list(())] == ["d"]


def test_removed_node_is_detached(namespace_tree):
    node = namespace_tree.create_file(T("/d/f"), b"x")
    namespace_tree.remove(T("/d/f"))
    assert node.parent is None
    # the same name can be reused straight away
    namespace_tree.create(T("/d/f"))
    assert_tree_consistent(namespace_tree)


def test_detach_requires_write_lock(namespace_tree):
    node = namespace_tree.create_file(T("/f.bin"), b"data")
    with pytest.raises(AssertionError):
        namespace_tree._detach(node)
    assert namespace_tree.read(T("/f.bin")) == b"data"
