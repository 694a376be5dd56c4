def rename(store, old_uri, new_uri):
    position = store.remove(old_uri)
    if position is not None:
        store.set(new_uri, position)

def delete(store, uri):
    store.remove(uri)
