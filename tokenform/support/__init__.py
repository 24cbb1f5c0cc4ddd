""" Supporting odds and ends which don't depend on the rest of tokenform. """
