import pytest

from deployment.constants import ERC20_TEST, YOUR_CONTRACT
from deployment.params import ConstructorParameters


def test_deployer_info(deployer, creator, registry_filepath):
    assert deployer.get_account() == creator
    assert deployer.registry_filepath == registry_filepath
    assert deployer.verify is False


def test_resolve_deployer_variable(deployer, creator):
    params = deployer.constructor_parameters
    assert list(params.resolve(YOUR_CONTRACT).items()) == [("_owner", creator.address)]
    assert list(params.resolve(ERC20_TEST).items()) == []

    with pytest.raises(ValueError, match="not listed"):
        params.resolve("Unknown")


def test_resolve_constant(deployer, account1):
    config = {
        "constants": {"OWNER": account1.address},
        "contracts": [{YOUR_CONTRACT: {"constructor": {"_owner": "$OWNER"}}}],
    }
    params = ConstructorParameters.from_config(config)
    assert params.resolve(YOUR_CONTRACT)["_owner"] == account1.address


def test_invalid_constructor_parameters(deployer, account1):
    # ERC20Test takes no constructor arguments
    config = {"contracts": [{ERC20_TEST: {"constructor": {"initialSupply": 1}}}]}
    with pytest.raises(ConstructorParameters.Invalid, match="length mismatch"):
        ConstructorParameters.from_config(config)

    config = {"contracts": [{YOUR_CONTRACT: {"constructor": {"owner": account1.address}}}]}
    with pytest.raises(ConstructorParameters.Invalid, match="expected ABI name '_owner'"):
        ConstructorParameters.from_config(config)

    config = {"contracts": [{YOUR_CONTRACT: {"constructor": {"_owner": 42}}}]}
    with pytest.raises(ConstructorParameters.Invalid, match="does not match expected ABI type"):
        ConstructorParameters.from_config(config)


def test_unknown_variables(deployer):
    config = {"contracts": [{YOUR_CONTRACT: {"constructor": {"_owner": "$OWNER"}}}]}
    with pytest.raises(ValueError, match="Constant 'OWNER' not found"):
        ConstructorParameters.from_config(config)

    config = {"contracts": [{YOUR_CONTRACT: {"constructor": {"_owner": "$someone"}}}]}
    with pytest.raises(ValueError, match="Unknown variable"):
        ConstructorParameters.from_config(config)


def test_invalid_params_file(make_deployer, creator, params_config):
    config = dict(params_config)
    del config["artifacts"]
    with pytest.raises(ValueError, match="artifact filename"):
        make_deployer(creator, config=config)

    config = dict(params_config, contracts=[])
    with pytest.raises(ValueError, match="'contracts' field"):
        make_deployer(creator, config=config)

    config = dict(params_config, contracts=[[ERC20_TEST]])
    with pytest.raises(ValueError, match="Malformed"):
        make_deployer(creator, config=config)


def test_constants_exposed_as_attributes(make_deployer, creator, params_config):
    config = dict(params_config, constants={"GREETING": "gm"})
    deployer = make_deployer(creator, config=config)
    assert deployer.constants.GREETING == "gm"
