"""Run fragments of code from a Neovim buffer.

The user selects a snippet, sniprun executes it out of process with the
backend matching the buffer's filetype and shows the output (or the
failure) back in the editor.

The top‑level modules include:

* ``config`` – configuration handling for environment variables.
* ``models`` – support levels, the captured request context and results.
* ``errors`` – the error taxonomy shared by all backends.
* ``interpreters`` – language backends implementing the four‑stage pipeline.
* ``registry`` – filetype alias to backend table.
* ``launcher`` – backend selection and pipeline driver.
* ``session`` – shared session state, event dispatch and result delivery.
* ``host`` / ``nvim`` – the editor boundary and its pynvim implementation.
"""

__version__ = "0.3.0"
