"""
Fan-out helper for independent read queries issued within one request.
"""

import concurrent.futures

from flask import current_app


def gather(*queries):
    """
    Run zero-argument query callables concurrently and return their results
    in the order given.

    Each callable runs in its own application context, so it gets its own
    database session. Anything it returns is detached once it finishes:
    relationships needed later must be eager-loaded by the query itself.

    The first failure (in call order) is re-raised after every query settled.
    """
    if not queries:
        return []

    app = current_app._get_current_object()

    def run(query):
        with app.app_context():
            return query()

    workers = max(1, min(len(queries), app.config.get("QUERY_MAX_WORKERS", 5)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as ex:
        futures = [ex.submit(run, query) for query in queries]
        concurrent.futures.wait(futures)
    return [future.result() for future in futures]
