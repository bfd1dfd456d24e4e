"""
# pfstruct: PackFile containers for humans.

A PackFile is a binary container made of a small file header followed by a
table of chunks; each chunk is identified by a four-character code and carries
a version and a payload. The content type of the container, another
four-character code, tells which kind of records the chunks hold.

Three layers are defined:

 1. the layouts (see core.Layout): declarative packed structures viewed over
    a buffer, used to describe the file header and the chunk headers.

 2. the container (see pf.PackFile): it owns the whole file as an immutable
    buffer, validates its header once when the data is assigned and then walks
    the chunk table on request, returning borrowed views of the payloads.

 3. the records (see pf.factory): types registered by (content type, chunk
    identifier) that build an owned, structured representation of a payload.

A chunk that is absent is not an error: lookups return None. An entry of the
chunk table that is not consistent with the buffer ends the walk, unless the
PackFile is asked to be compliant with Compliant.CHUNKS.
"""
