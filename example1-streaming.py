import hashlib
import sys

from py_sha3.sha3 import create


# Sandbox
if __name__ == '__main__':
    # Hash this script (or a file given on the command line) in small chunks
    path = sys.argv[1] if len(sys.argv) > 1 else __file__
    algorithm = sys.argv[2] if len(sys.argv) > 2 else 'sha3-256'

    h = create(algorithm, verbose=True)
    with open(path, 'rb') as f:
        while chunk := f.read(100):
            h.absorb(chunk)
    digest = h.finalize()
    print(f'{h.name}({path}) = {digest.hex()}')

    # Does it agree with the standard library? It does!
    if not h.use_keccak_padding:
        with open(path, 'rb') as f:
            ref = hashlib.new(h.name, f.read()).digest()
        print(ref == digest)
