"""Token-gated image store.

Accepts authenticated uploads under generated names, serves them back from
``/images``, deletes them on request and prunes the ones the backend no
longer references.
"""
