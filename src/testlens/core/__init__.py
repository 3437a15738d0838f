"""Core report processing: results, identifiers, linkification and views."""
