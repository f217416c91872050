"""
Resolver tests (greedy longest-match walk over the command tree).

Scope
- Validate leaf-over-directory precedence, halting rules and the default fallback.
- Validate grouping directories without a default module.
- Validate determinism and the command-not-found fault.
- Exercise both registries: in-memory and file-system backed.

Conventions
- Test method names follow CamelCase per project convention.
- File-system trees are written into temporary directories.
"""

from __future__ import annotations

import os
import tempfile
import textwrap
import unittest
from unittest import TestCase

from burrow import (
    Command,
    CommandNotFoundError,
    FileSystemRegistry,
    MappingRegistry,
    Resolution,
    locate,
    resolve,
)
from burrow.resolver import COMMAND_NAME


class Named(Command):
    def execute(self, *args):
        return type(self).__name__


class Root(Named): ...
class Leaf(Named): ...
class Directory(Named): ...
class Create(Named): ...
class Sub(Named): ...


def _tree():
    return MappingRegistry({
        "default": Root,
        "foo": Leaf,
        "foo/default": Directory,
        "create/default": Create,
        "group/sub": Sub,
    })


class TestCommandName(TestCase):
    """Command-name grammar."""

    def testValidNames(self):
        for token in ("create", "a-b", "v2", "foo_bar", "a-b-c"):
            with self.subTest(token=token):
                self.assertTrue(COMMAND_NAME.fullmatch(token))

    def testInvalidNames(self):
        for token in ("", "-a", "a-", "a--b", "--help", "a.b", "a/b", "héllo"):
            with self.subTest(token=token):
                self.assertFalse(COMMAND_NAME.fullmatch(token))


class TestResolve(TestCase):
    """Behavioral tests for resolve() on an in-memory tree."""

    def setUp(self):
        self.registry = _tree()

    def testEmptyArgvResolvesRootDefault(self):
        self.assertEqual(resolve(self.registry, "tool", []), Resolution(("default",), ("tool",), 0))

    def testLeafPreferredOverDirectoryDefault(self):
        resolution = resolve(self.registry, "tool", ["foo"])
        self.assertEqual(resolution.module, ("foo",))
        self.assertEqual(resolution.commands, ("tool", "foo"))
        self.assertEqual(resolution.index, 1)

    def testDirectoryDefault(self):
        resolution = resolve(self.registry, "tool", ["create", "widget", "-f"])
        self.assertEqual(resolution, Resolution(("create", "default"), ("tool", "create"), 1))

    def testHaltsOnInvalidCommandName(self):
        resolution = resolve(self.registry, "tool", ["--force", "create"])
        self.assertEqual(resolution, Resolution(("default",), ("tool",), 0))

    def testHaltsWhenNothingMatches(self):
        resolution = resolve(self.registry, "tool", ["unknown", "create"])
        self.assertEqual(resolution, Resolution(("default",), ("tool",), 0))

    def testGroupingDirectoryWithoutDefault(self):
        resolution = resolve(self.registry, "tool", ["group", "sub", "x"])
        self.assertEqual(resolution, Resolution(("group", "sub"), ("tool", "sub"), 2))

    def testGroupingDirectoryTokenFallsBackToArgument(self):
        resolution = resolve(self.registry, "tool", ["group", "x"])
        self.assertEqual(resolution, Resolution(("default",), ("tool",), 0))

    def testResolutionIsDeterministic(self):
        argv = ["foo", "bar", "--x"]
        self.assertEqual(resolve(self.registry, "tool", argv), resolve(self.registry, "tool", argv))

    def testLocateLoadsCommand(self):
        command = locate(self.registry, resolve(self.registry, "tool", ["foo"]))
        self.assertIsInstance(command, Leaf)

    def testLocateWithoutRootDefaultRaises(self):
        registry = MappingRegistry({"create/default": Create})
        with self.assertRaises(CommandNotFoundError) as context:
            locate(registry, resolve(registry, "tool", ["nothing"]))
        self.assertEqual(context.exception.options["module"], ("default",))


class TestMappingRegistry(TestCase):
    """In-memory registry semantics."""

    def testKeysAcceptTuplesAndStrings(self):
        registry = MappingRegistry({("a", "default"): Root, "b/c": Leaf})
        self.assertTrue(registry.exists(("a", "default")))
        self.assertTrue(registry.exists(("b", "c")))
        self.assertTrue(registry.isdir(("a",)))
        self.assertTrue(registry.isdir(("b",)))
        self.assertFalse(registry.isdir(("b", "c")))

    def testInstancesAndClassesAreLoaded(self):
        instance = Leaf()
        registry = MappingRegistry({"a": instance, "b": Root})
        self.assertIs(registry.load(("a",)), instance)
        self.assertIsInstance(registry.load(("b",)), Root)

    def testInvalidEntriesRejected(self):
        with self.assertRaises(TypeError):
            MappingRegistry([("a", Root)])
        with self.assertRaises(ValueError):
            MappingRegistry({"a//b": Root})
        with self.assertRaises(TypeError):
            MappingRegistry({"a": object}).load(("a",))


class TestFileSystemRegistry(TestCase):
    """Resolution and loading against a directory of command modules."""

    def setUp(self):
        self._directory = tempfile.TemporaryDirectory()
        self.root = self._directory.name
        self.write("default.py", """
            from burrow import Command

            class Root(Command):
                def execute(self, context):
                    return "root"
        """)
        self.write("foo.py", """
            from burrow import Command

            class Leaf(Command):
                def execute(self, context):
                    return "leaf"
        """)
        self.write("foo/default.py", """
            from burrow import Command

            class Directory(Command):
                def execute(self, context):
                    return "directory"
        """)
        self.write("tools/build-all.py", """
            from burrow import Param, command

            @command(params=(Param("target", type=str),))
            def build(target, context):
                return target
        """)
        self.registry = FileSystemRegistry(self.root)

    def tearDown(self):
        self._directory.cleanup()

    def write(self, path, source):
        filename = os.path.join(self.root, *path.split("/"))
        os.makedirs(os.path.dirname(filename), exist_ok=True)
        with open(filename, "w", encoding="utf-8") as file:
            file.write(textwrap.dedent(source))

    def testLeafPreferredOverDirectoryDefault(self):
        resolution = resolve(self.registry, "tool", ["foo", "x"])
        self.assertEqual(resolution, Resolution(("foo",), ("tool", "foo"), 1))
        self.assertEqual(locate(self.registry, resolution).execute(None), "leaf")

    def testGroupingDirectoryAndHyphenatedLeaf(self):
        resolution = resolve(self.registry, "tool", ["tools", "build-all", "app"])
        self.assertEqual(resolution, Resolution(("tools", "build-all"), ("tool", "build-all"), 2))
        self.assertEqual(locate(self.registry, resolution).execute("app", None), "app")

    def testRootDefault(self):
        resolution = resolve(self.registry, "tool", ["missing"])
        self.assertEqual(locate(self.registry, resolution).execute(None), "root")

    def testModuleWithoutCommandRejected(self):
        self.write("empty.py", """
            from burrow import Command
        """)
        with self.assertRaises(TypeError):
            self.registry.load(("empty",))

    def testModuleWithSeveralCommandsRejected(self):
        self.write("twice.py", """
            from burrow import Command

            class One(Command): ...
            class Two(Command): ...
        """)
        with self.assertRaises(TypeError):
            self.registry.load(("twice",))

    def testSharedBaseInModuleIsSkipped(self):
        self.write("based.py", """
            from burrow import Command, Option

            class Base(Command):
                options = (Option("verbose", flag="v", toggle=True),)

            class Concrete(Base):
                def execute(self, options, context):
                    return options["verbose"]
        """)
        command = self.registry.load(("based",))
        self.assertEqual(type(command).__name__, "Concrete")
        self.assertTrue(command.execute({"verbose": True}, None))


if __name__ == "__main__":
    unittest.main()
