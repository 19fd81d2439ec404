from signup_api.auth.passwords import check_password_hashing, hash_password, verify_password


def test_hash_password_never_returns_plaintext() -> None:
    hashed = hash_password('s3cret', rounds=4)

    assert hashed
    assert hashed != 's3cret'
    assert 's3cret' not in hashed


def test_hash_password_uses_a_fresh_salt_each_time() -> None:
    assert hash_password('s3cret', rounds=4) != hash_password('s3cret', rounds=4)


def test_verify_password_accepts_only_the_original_password() -> None:
    hashed = hash_password('s3cret', rounds=4)

    assert verify_password('s3cret', hashed)
    assert not verify_password('S3cret', hashed)


def test_verify_password_rejects_malformed_hash() -> None:
    assert not verify_password('s3cret', 'not-a-bcrypt-hash')


def test_password_longer_than_72_bytes_is_hashed_and_verified() -> None:
    password = 'x' * 80

    hashed = hash_password(password, rounds=4)

    assert verify_password(password, hashed)
    assert not verify_password('x' * 72, hashed)


def test_passwords_differing_after_byte_72_do_not_share_a_hash() -> None:
    prefix = 'p' * 72
    hashed = hash_password(prefix + 'first', rounds=4)

    assert verify_password(prefix + 'first', hashed)
    assert not verify_password(prefix + 'second', hashed)


def test_multibyte_passwords_are_accepted() -> None:
    password = 'пароль-密码-' * 10

    assert verify_password(password, hash_password(password, rounds=4))


def test_check_password_hashing_passes_with_installed_bcrypt() -> None:
    check_password_hashing()
