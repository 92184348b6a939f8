from . import depends


def main():
    for store in depends.get_stores():
        created = store.create_bucket()
        state = "created" if created else "already exists"
        print(f"{store.store_id.value} bucket {store.bucket} {state}")
