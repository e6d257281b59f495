from omnos import capitalize


def test_capitalize():
    assert capitalize("omnos") == "Omnos"
    assert capitalize("") == ""
    assert capitalize("a") == "A"


def test_capitalize_leaves_tail_alone():
    assert capitalize("mATLANG") == "MATLANG"
    assert capitalize("1st") == "1st"
