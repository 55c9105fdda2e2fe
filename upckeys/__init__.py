"""
upckeys -- WPA2 Passphrase Recovery for UPC Devices
====================================================

Recovers the default WPA2 passphrase of UPC cable modems from the
broadcast ESSID (``UPCxxxxxxx``) and a list of candidate serial-number
prefixes.  The ESSID and the passphrase are both derived from the
device serial number, so the tool searches the serial space for
numbers consistent with the ESSID and re-derives the key for each.

Modules:
    - upckeys.core.engine: Recovery orchestrator
    - upckeys.core.models: Pydantic data models
    - upckeys.derivation: ESSID oracle, search, serial and passphrase derivation
    - upckeys.parsers: Argument parsing utilities
    - upckeys.output: Stdout result formatting
    - upckeys.cli: Click-based command-line interface

References:
    - Lorente, E. N., Meijer, C., & Verdult, R. (2015). Scrutinizing WPA2
      Password Generating Algorithms in Wireless Routers. USENIX WOOT.
"""

__version__ = "1.0.0"
__tool_name__ = "upckeys"
