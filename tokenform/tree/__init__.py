""" Formatting and parsing of parse trees, on the same engine as for symbols. """
