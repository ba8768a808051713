import pytest

from model import Costume, Entity, Runtime, ScratchList, Variable


def _mapping(*entries):
    return {entry.id: entry for entry in entries}


@pytest.fixture
def runtime():
    runtime = Runtime()
    runtime.add_target(
        Entity(
            name="Stage",
            is_stage=True,
            variables=_mapping(
                Variable(id="id5", name="Variable3"),
                ScratchList(id="id6", name="List3"),
            ),
        )
    )
    return runtime


@pytest.fixture
def sprite(runtime):
    return runtime.add_target(
        Entity(
            name="Sprite1",
            variables=_mapping(
                Variable(id="id1", name="Variable1"),
                ScratchList(id="id2", name="List1"),
                Variable(id="id3", name="Variable2"),
                ScratchList(id="id4", name="List2"),
                Variable(id="id2_1", name="Avg(Total / Count)"),
                ScratchList(id="id2_2", name="List of Symbols."),
                Variable(id="id2_3", name=" !\"#$%&'()*+,-./:;<=>?@[\\]^`{|}~]"),
                Variable(id="id2_4", name="平均(合計 / 件数)"),
                ScratchList(id="id2_5", name="シンボル　配列。"),
            ),
        )
    )


@pytest.fixture
def costumes():
    return [
        Costume(
            asset_id="01ae57fd339529445cb890978ef8a054",
            name="Costume1",
            bitmap_resolution=1,
            md5="01ae57fd339529445cb890978ef8a054.svg",
            data_format="svg",
            rotation_center_x=47,
            rotation_center_y=55,
        ),
        Costume(
            asset_id="3b6274510488d5b26447c1c266475801",
            name="Costume2",
            bitmap_resolution=1,
            md5="3b6274510488d5b26447c1c266475801.svg",
            data_format="svg",
            rotation_center_x=65,
            rotation_center_y=61,
        ),
    ]


@pytest.fixture
def full_sprite(costumes):
    return Entity(
        name="Sprite1",
        x=11,
        y=12,
        direction=33,
        visible=False,
        size=44,
        costumes=costumes,
        current_costume=2,
        rotation_style="left-right",
        variables=_mapping(
            Variable(id="id1", name="Variable1", value=10),
            ScratchList(id="id2", name="List1", value=[1, 2, 3]),
            Variable(id="id3", name="Variable2", value=0),
            ScratchList(id="id4", name="List2", value=[]),
            Variable(id="id5", name="Variable3", value="abc"),
            ScratchList(id="id6", name="List3", value=["a", "b", "c"]),
        ),
    )
