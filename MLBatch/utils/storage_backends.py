import pickle
import re
import zlib

from redis import StrictRedis

PARTITION_KEY = re.compile(r'_p(\d+)\.pickle$')


def partition_key(dataset_id, index):
    return '{}_p{}.pickle'.format(dataset_id, index)


def partition_index(key):
    match = PARTITION_KEY.search(key)
    if match is None:
        raise ValueError(f"'{key}' is not a partition key")
    return int(match.group(1))


class StorageBackend:
    """
    Keeps pickled (and by default zlib-compressed) partitions under their partition keys.
    """
    needs_storage = False

    def __init__(self, compression=True, **kwargs):
        self.compression = compression

    def put(self, key, object_):
        self._put(key, self.dumps(object_))

    def get(self, key):
        data = self._get(key)
        if data is None:
            raise KeyError(key)
        return self.loads(data)

    def dumps(self, object_):
        data = pickle.dumps(object_)
        return zlib.compress(data) if self.compression else data

    def loads(self, data):
        return pickle.loads(zlib.decompress(data) if self.compression else data)

    def delete(self, keys):
        raise NotImplementedError("Available in subclasses: RedisBackend, CosBackend")

    def _put(self, key, data):
        raise NotImplementedError("Available in subclasses: RedisBackend, CosBackend")

    def _get(self, key):
        raise NotImplementedError("Available in subclasses: RedisBackend, CosBackend")


class RedisBackend(StorageBackend):
    """
    One client per host in ``redis_hosts``; partition i is stored on host i % len(redis_hosts).
    """

    def __init__(self, redis_hosts, compression=True, port=6379, **kwargs):
        # storage and bucket are meaningful only to object-storage backends
        super().__init__(compression)
        self.clients = [StrictRedis(host=host, port=port) for host in redis_hosts]

    def shard(self, key):
        return self.clients[partition_index(key) % len(self.clients)]

    def delete(self, keys):
        shards = {}
        for key in keys:
            shards.setdefault(partition_index(key) % len(self.clients), []).append(key)
        for shard, shard_keys in shards.items():
            self.clients[shard].delete(*shard_keys)

    def _put(self, key, data):
        self.shard(key).set(key, data)

    def _get(self, key):
        return self.shard(key).get(key)


class CosBackend(StorageBackend):
    """
    Objects live in a bucket of a lithops ``Storage`` instance.
    """
    needs_storage = True

    def __init__(self, storage, bucket, compression=True, **kwargs):
        super().__init__(compression)
        self.storage = storage
        self.bucket = bucket

    def delete(self, keys):
        self.storage.delete_objects(self.bucket, list(keys))

    def _put(self, key, data):
        self.storage.put_object(self.bucket, key, data)

    def _get(self, key):
        return self.storage.get_object(self.bucket, key)
