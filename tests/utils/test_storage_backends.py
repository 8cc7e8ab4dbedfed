import pytest

from MLBatch.utils import storage_backends
from MLBatch.utils.storage_backends import CosBackend, RedisBackend, partition_index, partition_key


class FakeStorage:
    def __init__(self):
        self.objects = {}

    def put_object(self, bucket, key, body):
        self.objects[(bucket, key)] = body

    def get_object(self, bucket, key):
        return self.objects[(bucket, key)]

    def delete_objects(self, bucket, key_list):
        for key in key_list:
            self.objects.pop((bucket, key))


class FakeRedis:
    def __init__(self, host, port=6379):
        self.host = host
        self.objects = {}

    def set(self, key, value):
        self.objects[key] = value

    def get(self, key):
        return self.objects.get(key)

    def delete(self, *keys):
        for key in keys:
            self.objects.pop(key, None)


def test_cos_backend_compresses_objects():
    storage = FakeStorage()
    backend = CosBackend(storage, 'datasets')
    backend.put('ds_p0.pickle', [(1, [0.5, 2.0])])

    assert backend.get('ds_p0.pickle') == [(1, [0.5, 2.0])]
    assert not storage.objects[('datasets', 'ds_p0.pickle')].startswith(b'\x80')

    backend.delete(['ds_p0.pickle'])
    assert storage.objects == {}


def test_redis_backend_shards_by_partition(monkeypatch):
    monkeypatch.setattr(storage_backends, 'StrictRedis', FakeRedis)
    backend = RedisBackend(redis_hosts=['r0', 'r1'], storage=None, bucket=None)

    for p in range(4):
        backend.put(partition_key('ds', p), p)

    assert sorted(backend.clients[0].objects) == ['ds_p0.pickle', 'ds_p2.pickle']
    assert sorted(backend.clients[1].objects) == ['ds_p1.pickle', 'ds_p3.pickle']
    assert backend.get('ds_p3.pickle') == 3

    backend.delete(['ds_p0.pickle', 'ds_p1.pickle', 'ds_p2.pickle'])
    assert backend.clients[0].objects == {}
    assert list(backend.clients[1].objects) == ['ds_p3.pickle']


def test_missing_key_raises(monkeypatch):
    monkeypatch.setattr(storage_backends, 'StrictRedis', FakeRedis)
    backend = RedisBackend(redis_hosts=['r0'])

    with pytest.raises(KeyError):
        backend.get('ds_p0.pickle')


def test_partition_keys():
    assert partition_index(partition_key('a1b2', 12)) == 12
    with pytest.raises(ValueError):
        partition_index('ds-part3.pickle')


def test_uncompressed_backend():
    storage = FakeStorage()
    backend = CosBackend(storage, 'datasets', compression=False)
    backend.put('ds_p0.pickle', {'a': 1})

    assert backend.get('ds_p0.pickle') == {'a': 1}
    assert storage.objects[('datasets', 'ds_p0.pickle')].startswith(b'\x80')
