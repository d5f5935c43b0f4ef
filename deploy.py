# deploy.py
from db import init_db, reader, get_state
from wallet import generate_keypair
import config


def main():
    owner = config.OWNER
    priv_hex = None
    if not owner:
        priv_hex, owner = generate_keypair()
    init_db(owner=owner)
    with reader() as db:
        s = get_state(db)
        deployed_owner = s.owner
    if deployed_owner != owner:
        print("Governance state already deployed; owner unchanged.")
        print("Owner public key:", deployed_owner)
        return
    print("Governance state deployed.")
    print("Owner public key:", owner)
    if priv_hex:
        print("Owner private key (store it safely, it is not saved):", priv_hex)


if __name__ == "__main__":
    main()
