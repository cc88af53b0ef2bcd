import sys

import atheris
from helpers import EnhancedDataProvider

with atheris.instrument_imports():
    from formbind import BindError, Binder, SchemaBuilder
    from formbind.converters import to_bool, to_date, to_decimal, to_float, to_int

schema = (
    SchemaBuilder()
    .required("name")
    .optional("age", convert=to_int)
    .optional("price", convert=to_decimal)
    .optional("ratio", convert=to_float)
    .optional("born", convert=to_date)
    .required_many("tags")
    .optional_many("flags", convert=to_bool)
    .build()
)
keys = [d.name for d in schema]

fail_fast = Binder(schema)
collecting = Binder(schema, config={"COLLECT_ERRORS": True, "EMPTY_AS_MISSING": True})


def TestOneInput(data: bytes) -> None:
    fdp = EnhancedDataProvider(data)
    pairs = fdp.ConsumePairs(keys)
    binder = fdp.PickValueInList([fail_fast, collecting])

    try:
        binder.bind(pairs)
    except BindError:
        return


def main():
    atheris.Setup(sys.argv, TestOneInput)
    atheris.Fuzz()


if __name__ == "__main__":
    main()
