import gzip
import json
import tempfile
import unittest
from pathlib import Path

import numpy as np

from keyevo.infrastructure.containers import (
    CHECKPOINT_FORMAT,
    RastriginPoint,
    VectorContainer,
    XorNetwork,
    load_container,
    save_container,
)
from keyevo.infrastructure.containers._serialization import (
    array_to_payload,
    container_to_payload,
    payload_to_array,
)
from keyevo.infrastructure.sampling import GaussianSampler


class Vec4(VectorContainer):
    size = 4


class TestArrayPayload(unittest.TestCase):
    def test_payload_preserves_shape_and_values(self):
        arr = np.arange(6, dtype=np.float64).reshape(2, 3)
        out = payload_to_array(array_to_payload(arr))
        self.assertEqual(out.shape, (2, 3))
        np.testing.assert_array_equal(out, arr)
        self.assertTrue(out.flags.writeable)

    def test_payload_is_json_safe(self):
        payload = array_to_payload(np.ones((3,)))
        self.assertEqual(json.loads(json.dumps(payload)), payload)


class TestContainerCheckpoints(unittest.TestCase):
    def test_network_roundtrip_json(self):
        net = XorNetwork.sample_normal(0.0, 1.0, GaussianSampler(13))
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "xor.json"
            net.save_json(path)

            data = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(data["format"], CHECKPOINT_FORMAT)
            self.assertIn("layers.3.bias", data["state"])

            loaded = XorNetwork.load_json(path)
        self.assertIsInstance(loaded, XorNetwork)
        np.testing.assert_array_equal(loaded.to_vector(), net.to_vector())

    def test_vector_roundtrip_gzip(self):
        p = RastriginPoint([0.1, -0.2, 0.3, -0.4, 0.5])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "point.json.gz"
            save_container(p, path)

            with gzip.open(path, "rt", encoding="utf-8") as fh:
                self.assertEqual(json.load(fh)["format"], CHECKPOINT_FORMAT)

            loaded = load_container(RastriginPoint, path)
        np.testing.assert_array_equal(loaded.values, p.values)

    def test_non_canonical_extent_survives(self):
        v = Vec4([1.0, 2.0])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "short.json"
            v.save_json(path)
            loaded = Vec4.load_json(path)
        np.testing.assert_array_equal(loaded.values, [1.0, 2.0])

    def test_wrong_container_type(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "point.json"
            RastriginPoint().save_json(path)
            with self.assertRaises(TypeError):
                Vec4.load_json(path)

    def test_unsupported_format(self):
        payload = container_to_payload(Vec4())
        payload["format"] = "something.else"
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bad.json"
            path.write_text(json.dumps(payload), encoding="utf-8")
            with self.assertRaises(ValueError):
                Vec4.load_json(path)


if __name__ == "__main__":
    unittest.main()
