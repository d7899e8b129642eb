"""Entity, keyframe and prediction domain models."""
