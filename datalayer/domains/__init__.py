"""Domain packages: schemas, data_layer, dispatch, location."""
