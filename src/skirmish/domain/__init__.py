"""Combat domain: state, action catalog, resolution, move enumeration and scoring."""
