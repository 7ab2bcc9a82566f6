"""Page 1: Imported Users — Browse records saved by previous imports."""

import streamlit as st
import plotly.express as px
import polars as pl

from csv_importer.state import get_repository

st.set_page_config(page_title="Imported Users", layout="wide")
st.title("Imported Users")

users = get_repository().load_users()

if len(users) == 0:
    st.info("Nothing imported yet. Use the import page to upload and save a CSV file.")
    st.stop()

c1, c2, c3 = st.columns(3)
with c1:
    st.metric("Users", f"{len(users):,}")
with c2:
    with_street = len(users.filter(pl.col("street").is_not_null() & (pl.col("street") != "")))
    st.metric("With Street Address", f"{with_street:,}")
with c3:
    countries = users.filter(pl.col("country").is_not_null() & (pl.col("country") != ""))["country"].n_unique()
    st.metric("Countries", f"{countries:,}")

st.divider()

query = st.text_input("Filter by name", placeholder="e.g. Doe")
shown = users
if query.strip():
    q = query.strip().lower()
    shown = users.filter(
        pl.col("first_name").fill_null("").str.to_lowercase().str.contains(q, literal=True)
        | pl.col("last_name").fill_null("").str.to_lowercase().str.contains(q, literal=True)
    )

col1, col2 = st.columns([2, 1])
with col1:
    st.write(f"**{len(shown):,} users**")
    st.dataframe(shown.to_pandas(), width="stretch", height=420, hide_index=True)
with col2:
    by_country = (
        users.with_columns(
            pl.when(pl.col("country").is_null() | (pl.col("country") == ""))
            .then(pl.lit("(none)"))
            .otherwise(pl.col("country"))
            .alias("country")
        )
        .group_by("country")
        .agg(pl.len().alias("users"))
        .sort("users", descending=True)
        .head(20)
        .to_pandas()
    )
    fig = px.bar(by_country, x="country", y="users", title="Users per Country")
    fig.update_layout(height=420, xaxis_tickangle=-45)
    st.plotly_chart(fig, width="stretch")
