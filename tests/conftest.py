import os

# Acceptance scenarios read their compartment from TF_VAR_compartment_id_for_create;
# local runs against the in-process emulator get a placeholder.
os.environ.setdefault("TF_VAR_compartment_id_for_create", "ocid1.compartment.oc1..exportsetharness")
