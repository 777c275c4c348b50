"""
Tests for the Unset sentinel.

This module verifies semantic guarantees of the `UnsetType` sentinel:
- Singleton identity (single instance per interpreter process).
- Falsy semantics and representation.
- Copying, deep copying, pickling and thread safety properties.
- Finality (type cannot be subclassed).
- nullify() materialization.
"""
import copy
import pickle
import unittest
from threading import Thread, Lock
from unittest import TestCase

from gnuopt.utils import *


class UnsetTest(TestCase):
    """
    Test suite for the `UnsetType` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(UnsetType(), UnsetType())
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))

    def testNotEqualToNoneOrFalse(self) -> None:
        """
        Falsy does not imply equality with other falsy values (None/False).
        """
        self.assertNotEqual(Unset, None)
        self.assertNotEqual(Unset, False)  # noqa: E712

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testUnionWithTypes(self) -> None:
        """
        PEP 604 unions accept the sentinel on either side for isinstance checks.
        """
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("text", Unset | str)
        self.assertNotIsInstance(1, str | Unset)

    def testCopyDeepcopyPreserveSingleton(self) -> None:
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)

    def testPickleRoundTrip(self) -> None:
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testThreadSafetySingleton(self) -> None:
        """
        Concurrent constructions return the same instance (thread-safe singleton).
        """
        results: list[UnsetType] = []
        lock: Lock = Lock()

        def worker():
            instance = UnsetType()
            with lock:
                results.append(instance)

        threads: list[Thread] = [Thread(target=worker) for _ in range(16)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(len(results), 16)
        for instance in results:
            self.assertIs(instance, Unset)

    def testFinalClass(self) -> None:
        """
        The class is final: attempts to subclass must fail with TypeError.
        """
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testNullify(self) -> None:
        self.assertEqual(nullify(Unset, "fallback"), "fallback")
        self.assertIsNone(nullify(Unset))
        self.assertIsNone(nullify(None, "fallback"))
        self.assertEqual(nullify(0, "fallback"), 0)


if __name__ == '__main__':
    unittest.main()
