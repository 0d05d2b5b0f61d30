"""
Property-based tests for the vocabulary encoders and vector materializer.
"""
# 说明：词表编码器与向量化的属性测试。
# 覆盖：
# - last_index 在两种 discard 策略下的取值
# - 标量编码：已登录返回词表 id，未登录/空值返回 last_index
# - 序列编码：永不返回空序列，保持长度/顺序约束
# - NTV 编码：未知项至多一个，空输入仅返回填充项
# - 稠密向量长度恒等于 num_unique_values，非零位置数不超过输入长度
# - 稀疏向量开启零值过滤后不含 0.0

from hypothesis import given, strategies as st

from featidx.encoders import (
    encode_ntv_sequence,
    encode_string,
    encode_string_sequence,
    to_dense_vector,
    to_sparse_vector,
)
from featidx.vocab import Vocabulary

TOKENS = st.text(alphabet="abcdefgh", min_size=1, max_size=3)
NAMES = ["n1", "n2", "n3", "n4"]
TERMS = ["t1", "t2", "t3"]
VALUES = st.one_of(
    st.none(),
    st.text(max_size=3),
    st.floats(min_value=-100.0, max_value=100.0, allow_nan=False, allow_infinity=False),
)


# ------------------------------------------------------------------ Strategies
@st.composite
def vocabularies(draw, min_size=0, max_size=12):
    # 生成去重后的 token 列表并构造词表，id 即位置
    tokens = draw(st.lists(TOKENS, min_size=min_size, max_size=max_size, unique=True))
    return Vocabulary.from_tokens(tokens)


@st.composite
def vocab_and_tokens(draw, max_size=20):
    # 从词表内外混合采样 token，覆盖已登录与未登录两种情况
    vocabulary = draw(vocabularies(min_size=1))
    pool = st.one_of(st.sampled_from(sorted(vocabulary)), TOKENS)
    tokens = draw(st.lists(pool, max_size=max_size))
    return vocabulary, tokens


@st.composite
def ntv_vocabularies(draw):
    # 从所有 name,term 组合中抽取子集作为 NTV 词表（至少一个，保证丢弃模式下 last_index 合法）
    keys = [f"{n},{t}" for n in NAMES for t in TERMS]
    chosen = draw(st.lists(st.sampled_from(keys), unique=True, min_size=1, max_size=len(keys)))
    return Vocabulary.from_tokens(chosen)


@st.composite
def ntv_bags(draw, max_size=15):
    return draw(st.lists(st.tuples(st.sampled_from(NAMES), st.sampled_from(TERMS), VALUES), max_size=max_size))


# ------------------------------------------------------------------ Vocabulary
@given(vocabularies(), st.booleans())
def test_last_index_matches_discard_policy(vocabulary, discard):
    expected = vocabulary.size - 1 if discard else vocabulary.size
    assert vocabulary.last_index(discard) == expected
    assert vocabulary.last_index(discard) == vocabulary.last_index(discard)


# ------------------------------------------------------------------ Scalar
@given(vocab_and_tokens(), st.booleans())
def test_scalar_encoder_maps_known_or_falls_back(data, discard):
    vocabulary, tokens = data
    last_index = vocabulary.last_index(discard)
    assert encode_string(None, vocabulary, discard) == last_index
    for token in tokens:
        encoded = encode_string(token, vocabulary, discard)
        if token in vocabulary:
            assert encoded == vocabulary[token]
        else:
            assert encoded == last_index


# ------------------------------------------------------------------ Sequence
@given(vocab_and_tokens(), st.booleans())
def test_sequence_encoder_never_empty(data, discard):
    vocabulary, tokens = data
    ids = encode_string_sequence(tokens, vocabulary, discard)
    assert len(ids) >= 1
    if not tokens:
        assert ids == [vocabulary.last_index(discard)]


@given(vocab_and_tokens())
def test_sequence_encoder_keep_mode_is_elementwise(data):
    vocabulary, tokens = data
    ids = encode_string_sequence(tokens, vocabulary, False)
    if tokens:
        assert ids == [encode_string(token, vocabulary, False) for token in tokens]


@given(vocab_and_tokens())
def test_sequence_encoder_discard_mode_keeps_known_in_order(data):
    vocabulary, tokens = data
    ids = encode_string_sequence(tokens, vocabulary, True)
    known = [vocabulary[token] for token in tokens if token in vocabulary]
    assert ids == (known or [vocabulary.last_index(True)])


# ------------------------------------------------------------------ NTV
@given(ntv_vocabularies(), ntv_bags(), st.booleans())
def test_ntv_encoder_unknowns_collapse(vocabulary, bag, discard):
    last_index = vocabulary.last_index(discard)
    result = encode_ntv_sequence(bag, vocabulary, discard)
    assert len(result) >= 1

    known = [(n, t) for n, t, _ in bag if f"{n},{t}" in vocabulary]
    has_unknown = len(known) < len(bag)
    if not discard:
        # 非丢弃模式下 last_index 不属于任何已登录项，未知项至多出现一次
        assert sum(1 for iv in result if iv.id == last_index and iv.value == 1.0) <= 1
    if not discard and has_unknown:
        assert result[-1].id == last_index
        assert result[-1].value == 1.0
        assert len(result) == len(known) + 1
    elif known:
        assert len(result) == len(known)


@given(ntv_vocabularies(), st.booleans())
def test_ntv_encoder_empty_input_is_padding_only(vocabulary, discard):
    result = encode_ntv_sequence([], vocabulary, discard)
    assert len(result) == 1
    assert result[0].id == vocabulary.last_index(discard)
    assert result[0].value == 0.0


# ------------------------------------------------------------------ Vectors
@given(ntv_vocabularies(), ntv_bags(), st.booleans())
def test_dense_vector_length_and_nonzero_count(vocabulary, bag, discard):
    id_values = encode_ntv_sequence(bag, vocabulary, discard)
    width = vocabulary.num_unique_values(discard)
    dense = to_dense_vector(id_values, width)
    assert dense.shape == (width,)
    assert int((dense != 0).sum()) <= len(id_values)


@given(ntv_vocabularies(), ntv_bags(), st.booleans())
def test_sparse_vector_filter_zero_removes_zeros(vocabulary, bag, discard):
    id_values = encode_ntv_sequence(bag, vocabulary, discard)
    sparse = to_sparse_vector(id_values, filter_zeros=True)
    assert 0.0 not in sparse.values
    assert len(sparse.indices) == len(sparse.values)

    unfiltered = to_sparse_vector(id_values, filter_zeros=False)
    assert list(unfiltered.indices) == [iv.id for iv in id_values]
