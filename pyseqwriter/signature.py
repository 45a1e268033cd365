import hashlib

# The new line preceding the header belongs to the signature, not to the signed content
signature_header = "\n[SIGNATURE]\n"

supported_signature_types = sorted(
    name for name in hashlib.algorithms_guaranteed if not name.startswith("shake")
)


def check_signature_type(signature_type: str) -> None:
    """
    Raises ValueError if `signature_type` is not a fixed-length digest guaranteed by `hashlib`.
    """
    if signature_type not in supported_signature_types:
        raise ValueError(
            f"Unsupported signature type. Must be one of {supported_signature_types}. "
            f"Passed: {signature_type}"
        )


def add_signature(file_name: str, signature_type: str = "md5") -> str:
    """
    Appends a [SIGNATURE] section to the sequence file `file_name`. The digest is computed over the file exactly as
    it is on disk before the section is added.

    Parameters
    ----------
    file_name : str
        Path of the `.seq` file to sign.
    signature_type : str, default='md5'
        Name of the `hashlib` digest.

    Returns
    -------
    digest : str
        Hex digest written to the file.

    Raises
    ------
    ValueError
        If `signature_type` is not supported.
    """
    check_signature_type(signature_type)

    with open(file_name, "rb") as input_file:
        digest = hashlib.new(signature_type, input_file.read()).hexdigest()

    with open(file_name, "a", encoding="utf-8") as output_file:
        output_file.write(signature_header)
        output_file.write(
            "# This is the hash of the Pulseq file, calculated right before the [SIGNATURE] section was added\n"
        )
        output_file.write(
            "# It can be reproduced/verified with md5sum if the file trimmed to the position right above [SIGNATURE]\n"
        )
        output_file.write(
            "# The new line character preceding [SIGNATURE] BELONGS to the signature (and needs to be stripped away for "
            "recalculating/verification)\n"
        )
        output_file.write(f"Type {signature_type}\n")
        output_file.write(f"Hash {digest}\n")

    return digest


def verify_signature(file_name: str) -> bool:
    """
    Recomputes the digest of a signed sequence file and compares it with the one stored in its [SIGNATURE] section.

    Parameters
    ----------
    file_name : str
        Path of the signed `.seq` file.

    Returns
    -------
    bool
        True if the stored hash matches the content.

    Raises
    ------
    ValueError
        If the file has no [SIGNATURE] section, or the section lacks `Type` or `Hash`.
    """
    with open(file_name, "rb") as input_file:
        content = input_file.read()

    position = content.rfind(signature_header.encode())
    if position < 0:
        raise ValueError(f"{file_name} has no [SIGNATURE] section.")

    fields = {}
    for line in content[position + len(signature_header) :].decode("utf-8").splitlines():
        line = line.strip()
        if line == "" or line.startswith("#"):
            continue
        key, _, value = line.partition(" ")
        fields[key] = value.strip()

    if "Type" not in fields or "Hash" not in fields:
        raise ValueError(f"[SIGNATURE] section of {file_name} must define Type and Hash.")

    check_signature_type(fields["Type"])
    digest = hashlib.new(fields["Type"], content[:position]).hexdigest()
    return digest == fields["Hash"].lower()
